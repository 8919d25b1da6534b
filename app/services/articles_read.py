from __future__ import annotations

import logging
from typing import Any, Dict, List

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.models.news_models import Article, Comment
from app.services.existence import EntityKind, exists
from app.services.validation import ArticleQuery

logger = logging.getLogger("app.articles")

ARTICLE_NOT_FOUND_MSG = "article_id not found"


def _articles_with_comment_count(*, with_body: bool) -> Select:
    comment_counts = (
        select(
            Comment.belongs_to.label("article_id"),
            func.count(Comment.comment_id).label("comment_count"),
        )
        .group_by(Comment.belongs_to)
        .subquery("comment_counts")
    )
    columns = [
        Article.article_id,
        Article.title,
        Article.author,
        Article.topic,
        Article.created_at,
        Article.votes,
    ]
    if with_body:
        columns.append(Article.body)
    comment_count = func.coalesce(comment_counts.c.comment_count, 0).label("comment_count")
    return (
        select(*columns, comment_count)
        .outerjoin(comment_counts, comment_counts.c.article_id == Article.article_id)
    )


def _sort_column(stmt: Select, sort_by: str):
    # comment_count is the labelled aggregate, everything else is a real column
    if sort_by == "comment_count":
        return stmt.selected_columns.comment_count
    return getattr(Article, sort_by)


async def list_articles(session: AsyncSession, query: ArticleQuery) -> List[Dict[str, Any]]:
    stmt = _articles_with_comment_count(with_body=False)
    if query.author is not None:
        stmt = stmt.where(Article.author == query.author)
    if query.topic is not None:
        stmt = stmt.where(Article.topic == query.topic)

    column = _sort_column(stmt, query.sort_by)
    stmt = stmt.order_by(column.asc() if query.order == "asc" else column.desc())

    res = await session.execute(stmt)
    rows = [dict(r) for r in res.mappings().all()]
    if rows:
        return rows

    if query.author is not None and not await exists(session, EntityKind.USER, query.author):
        logger.info("Article filter on unknown author", extra={"event": "unknown_author", "author": query.author})
        raise NotFoundError("User Not Found")
    if query.topic is not None and not await exists(session, EntityKind.TOPIC, query.topic):
        logger.info("Article filter on unknown topic", extra={"event": "unknown_topic", "topic": query.topic})
        raise NotFoundError("Topic Not Found")
    return rows


async def get_article(session: AsyncSession, article_id: int) -> Dict[str, Any]:
    stmt = _articles_with_comment_count(with_body=True).where(Article.article_id == article_id)
    res = await session.execute(stmt)
    row = res.mappings().first()
    if row is None:
        raise NotFoundError(ARTICLE_NOT_FOUND_MSG)
    return dict(row)
