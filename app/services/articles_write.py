from __future__ import annotations

import logging
from typing import Any, Dict

from sqlalchemy import Update, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError, ValidationError
from app.models.news_models import Article
from app.services.articles_read import ARTICLE_NOT_FOUND_MSG, get_article

logger = logging.getLogger("app.articles")


def vote_increment(article_id: int, inc_votes: int) -> Update:
    """UPDATE applying the delta at the store: votes = votes + :delta."""
    return (
        update(Article)
        .where(Article.article_id == article_id)
        .values(votes=Article.votes + inc_votes)
        .returning(Article.article_id)
    )


async def patch_article_votes(session: AsyncSession, article_id: int, inc_votes: int) -> Dict[str, Any]:
    if isinstance(inc_votes, bool) or not isinstance(inc_votes, int):
        raise ValidationError("Bad Request")

    res = await session.execute(vote_increment(article_id, inc_votes))
    if res.scalar_one_or_none() is None:
        await session.rollback()
        raise NotFoundError(ARTICLE_NOT_FOUND_MSG)
    await session.commit()
    logger.info(
        "Article votes changed",
        extra={"event": "article_votes_patched", "article_id": article_id, "inc_votes": inc_votes},
    )
    return await get_article(session, article_id)
