from contextlib import asynccontextmanager

import logging

from fastapi import FastAPI

from app.api import articles
from app.api import topics as topics_api
from app.api.error_handlers import register_error_handlers
from app.config import LOG_LEVEL, ROOT_PATH
from app.db import sa as db_sa


@asynccontextmanager
async def lifespan(app: FastAPI):
    await db_sa.init_sa_engine()
    try:
        yield
    finally:
        await db_sa.close_sa_engine()


app = FastAPI(
    lifespan=lifespan,
    root_path=ROOT_PATH,
)
register_error_handlers(app)
app.include_router(articles.router)
app.include_router(topics_api.router)


@app.get("/api", summary="API root")
async def api_root():
    return {"ok": True}


# Basic logging configuration (can be overridden by server config)
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
