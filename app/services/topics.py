from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.news_models import Topic


async def list_topics(session: AsyncSession) -> List[Dict[str, Any]]:
    res = await session.execute(select(Topic.slug, Topic.description).order_by(Topic.slug))
    return [dict(r) for r in res.mappings().all()]
