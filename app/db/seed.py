"""Load a dataset (topics, users, articles, comments) into an empty schema.

Comments reference their article by title; the generated article ids are
resolved while seeding.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.db.base import Base
from app.models import news_models  # noqa: F401 ensure model registration
from app.models.news_models import Article, Comment, Topic, User

logger = logging.getLogger("app.seed")

Dataset = Dict[str, List[Dict[str, Any]]]


def _ts(year: int, month: int, day: int, hour: int = 12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


DEV_DATA: Dataset = {
    "topics": [
        {"slug": "coding", "description": "Code is love, code is life"},
        {"slug": "football", "description": "FOOTIE!"},
        {"slug": "cooking", "description": "Hey good looking, what you got cooking?"},
    ],
    "users": [
        {"username": "tickle122", "name": "Tom Tickle",
         "avatar_url": "https://example.com/avatars/tickle122.png"},
        {"username": "grumpy19", "name": "Paul Grump",
         "avatar_url": "https://example.com/avatars/grumpy19.png"},
        {"username": "jessjelly", "name": "Jess Jelly",
         "avatar_url": "https://example.com/avatars/jessjelly.png"},
    ],
    "articles": [
        {"title": "Running a Node App", "topic": "coding", "author": "jessjelly",
         "body": "This is part two of a series on how to get up and running with Systemd and Node.js.",
         "created_at": _ts(2016, 8, 18)},
        {"title": "The Rise Of Thinking Machines", "topic": "coding", "author": "jessjelly",
         "body": "Many people know Watson as the IBM-developed cognitive super computer.",
         "created_at": _ts(2017, 7, 20)},
        {"title": "Who are the most followed clubs on Instagram?", "topic": "football", "author": "grumpy19",
         "body": "Manchester United are a massive club. But which clubs have the most followers?",
         "created_at": _ts(2017, 2, 3)},
        {"title": "Seafood substitutions are increasing", "topic": "cooking", "author": "tickle122",
         "body": "'SEAFOOD fraud is a serious global problem', begins a recent report from Oceana.",
         "created_at": _ts(2018, 5, 30)},
    ],
    "comments": [
        {"body": "Itaque quisquam est similique et est perspiciatis reprehenderit voluptatem autem.",
         "belongs_to": "The Rise Of Thinking Machines", "author": "tickle122", "votes": -1,
         "created_at": _ts(2017, 11, 22)},
        {"body": "Nobis consequatur animi. Ullam nobis quaerat voluptates veniam.",
         "belongs_to": "Running a Node App", "author": "grumpy19", "votes": 7,
         "created_at": _ts(2016, 11, 9)},
        {"body": "Qui sunt sit voluptas repellendus sed. Voluptatem et repellat fugiat.",
         "belongs_to": "Seafood substitutions are increasing", "author": "jessjelly", "votes": 3,
         "created_at": _ts(2018, 6, 2)},
    ],
}


async def create_schema(engine: AsyncEngine, *, drop: bool = False) -> None:
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def seed(session: AsyncSession, data: Dataset) -> None:
    await session.execute(insert(Topic), data["topics"])
    await session.execute(insert(User), data["users"])

    res = await session.execute(
        insert(Article).returning(Article.article_id, Article.title), data["articles"]
    )
    ids_by_title = {r.title: r.article_id for r in res}

    comments = [
        {**c, "belongs_to": ids_by_title[c["belongs_to"]]} for c in data.get("comments", [])
    ]
    if comments:
        await session.execute(insert(Comment), comments)
    await session.commit()
    logger.info(
        "Dataset seeded",
        extra={
            "event": "seeded",
            "topics": len(data["topics"]),
            "users": len(data["users"]),
            "articles": len(data["articles"]),
            "comments": len(comments),
        },
    )
