from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError, ValidationError
from app.models.news_models import Comment
from app.services.articles_read import ARTICLE_NOT_FOUND_MSG
from app.services.existence import EntityKind, exists
from app.services.validation import validate_order

logger = logging.getLogger("app.comments")

COMMENT_COLUMNS = (
    Comment.comment_id,
    Comment.votes,
    Comment.created_at,
    Comment.author,
    Comment.body,
    Comment.belongs_to,
)


async def list_comments(
    session: AsyncSession,
    article_id: int,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
) -> List[Dict[str, Any]]:
    # Any column of the comments table may be used for sorting
    column = Comment.__table__.c.get(sort_by if sort_by is not None else "created_at")
    if column is None:
        raise ValidationError("Bad Request")
    direction = validate_order(order)

    stmt = (
        select(*COMMENT_COLUMNS)
        .where(Comment.belongs_to == article_id)
        .order_by(column.asc() if direction == "asc" else column.desc())
    )
    res = await session.execute(stmt)
    rows = [dict(r) for r in res.mappings().all()]
    if not rows and not await exists(session, EntityKind.ARTICLE, article_id):
        raise NotFoundError(ARTICLE_NOT_FOUND_MSG)
    return rows


async def add_comment(session: AsyncSession, article_id: int, username: str, body: str) -> Dict[str, Any]:
    comment = Comment(belongs_to=article_id, author=username, body=body)
    session.add(comment)
    # FK / NOT NULL violations surface here as IntegrityError
    await session.commit()
    logger.info(
        "Comment posted",
        extra={"event": "comment_posted", "article_id": article_id, "comment_id": comment.comment_id},
    )
    return {c.key: getattr(comment, c.key) for c in COMMENT_COLUMNS}
