from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.sa import get_session
from app.models.schemas import TopicsResponse
from app.services import topics as svc

router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.get("", response_model=TopicsResponse, summary="All topics")
async def api_list_topics(session: AsyncSession = Depends(get_session)):
    rows = await svc.list_topics(session)
    return {"topics": rows}
