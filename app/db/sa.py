from __future__ import annotations

from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config import DB_COMMAND_TIMEOUT, DB_DSN, DB_POOL_SIZE


_engine: Optional[AsyncEngine] = None
_sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None


def _to_sqlalchemy_async_dsn(dsn: str | None) -> str:
    if not dsn:
        raise RuntimeError("DATABASE_URL is not configured")
    # Ensure SQLAlchemy asyncpg dialect
    if dsn.startswith("postgresql+asyncpg://"):
        return dsn
    if dsn.startswith("postgresql://"):
        return dsn.replace("postgresql://", "postgresql+asyncpg://", 1)
    if dsn.startswith("postgres://"):
        return dsn.replace("postgres://", "postgresql+asyncpg://", 1)
    # Fallback: assume already usable (e.g. sqlite+aiosqlite for local runs)
    return dsn


def _engine_options(async_dsn: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"pool_pre_ping": True}
    if async_dsn.startswith("postgresql+asyncpg://"):
        options["pool_size"] = DB_POOL_SIZE
        options["connect_args"] = {"command_timeout": DB_COMMAND_TIMEOUT}
    return options


async def init_sa_engine() -> None:
    global _engine, _sessionmaker
    if _engine is None:
        async_dsn = _to_sqlalchemy_async_dsn(DB_DSN)
        _engine = create_async_engine(async_dsn, **_engine_options(async_dsn))
        _sessionmaker = async_sessionmaker(
            bind=_engine,
            expire_on_commit=False,
            autoflush=False,
            autocommit=False,
        )


async def close_sa_engine() -> None:
    global _engine, _sessionmaker
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _sessionmaker = None


def engine() -> AsyncEngine:
    if _engine is None:
        raise RuntimeError("SQLAlchemy engine is not initialized. Call init_sa_engine() first.")
    return _engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; use as `session: AsyncSession = Depends(get_session)`."""
    if _sessionmaker is None:
        raise RuntimeError("SQLAlchemy engine is not initialized. Call init_sa_engine() first.")
    session = _sessionmaker()
    try:
        yield session
    finally:
        await session.close()
