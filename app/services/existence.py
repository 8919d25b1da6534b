from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from sqlalchemy import literal, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from app.models.news_models import Article, Topic, User


class EntityKind(str, Enum):
    USER = "user"
    TOPIC = "topic"
    ARTICLE = "article"


_KEY_COLUMNS: Dict[EntityKind, InstrumentedAttribute] = {
    EntityKind.USER: User.username,
    EntityKind.TOPIC: Topic.slug,
    EntityKind.ARTICLE: Article.article_id,
}


async def exists(session: AsyncSession, kind: EntityKind, key: Any) -> bool:
    """True when a row of `kind` is keyed by `key`. Store errors propagate."""
    column = _KEY_COLUMNS[kind]
    res = await session.execute(select(literal(1)).select_from(column.class_).where(column == key).limit(1))
    return res.first() is not None
