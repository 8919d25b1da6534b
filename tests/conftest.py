import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest
import sys
from pathlib import Path

# Ensure repository root is on sys.path for `import app`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.seed import create_schema, seed  # noqa: E402


def _ts(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, 20, 21, 54, tzinfo=timezone.utc)


ARTICLES = [
    # (title, topic, author, created_at, votes); ids follow list order
    ("Living in the shadow of a great man", "mitch", "butter_bridge", _ts(2018, 11, 15), 100),
    ("Sony Vaio; or, The Laptop", "mitch", "icellusedkars", _ts(2014, 11, 16), 0),
    ("Eight pug gifs that remind me of mitch", "mitch", "icellusedkars", _ts(2010, 11, 17), 12),
    ("Student SUES Mitch!", "mitch", "rogersop", _ts(2006, 11, 18), -3),
    ("UNCOVERED: catspiracy to bring down democracy", "cats", "rogersop", _ts(2002, 11, 19), 7),
    ("A", "mitch", "icellusedkars", _ts(1998, 11, 20), 0),
    ("Z", "mitch", "icellusedkars", _ts(1994, 11, 21), 2),
    ("Does Mitch predate civilisation?", "mitch", "icellusedkars", _ts(1990, 11, 22), 0),
    ("They're not exactly dogs, are they?", "mitch", "butter_bridge", _ts(1986, 11, 23), 1),
]

# article title -> number of comments
COMMENT_PLAN = [
    ("Living in the shadow of a great man", 13),
    ("They're not exactly dogs, are they?", 2),
    ("UNCOVERED: catspiracy to bring down democracy", 2),
    ("Eight pug gifs that remind me of mitch", 1),
]


def _comments() -> list[dict]:
    rows = []
    authors = ("butter_bridge", "icellusedkars", "rogersop")
    for title, count in COMMENT_PLAN:
        for _ in range(count):
            i = len(rows)
            rows.append({
                "body": f"Comment number {i} on '{title}'",
                "belongs_to": title,
                "author": authors[i % len(authors)],
                "votes": (i * 7) % 20 - 5,
                "created_at": _ts(2000 + i, 1 + i % 12, 1 + i % 28),
            })
    return rows


TEST_DATA = {
    "topics": [
        {"slug": "mitch", "description": "The man, the Mitch, the legend"},
        {"slug": "cats", "description": "Not dogs"},
        {"slug": "paper", "description": "what books are made of"},
    ],
    "users": [
        {"username": "butter_bridge", "name": "jonny",
         "avatar_url": "https://example.com/avatars/butter_bridge.jpg"},
        {"username": "icellusedkars", "name": "sam",
         "avatar_url": "https://example.com/avatars/icellusedkars.png"},
        {"username": "rogersop", "name": "paul",
         "avatar_url": "https://example.com/avatars/rogersop.jpg"},
        {"username": "lurker", "name": "do_nothing",
         "avatar_url": "https://example.com/avatars/lurker.png"},
    ],
    "articles": [
        {"title": title, "topic": topic, "author": author, "created_at": created_at, "votes": votes,
         "body": f"Body of '{title}'"}
        for title, topic, author, created_at, votes in ARTICLES
    ],
    "comments": _comments(),
}


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


def _make_engine(url: str, **kwargs):
    eng = create_async_engine(url, **kwargs)

    @event.listens_for(eng.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return eng


async def _seeded_factory(eng) -> async_sessionmaker[AsyncSession]:
    await create_schema(eng)
    factory = async_sessionmaker(bind=eng, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        await seed(session, TEST_DATA)
    return factory


@asynccontextmanager
async def _client_for(factory):
    from app.db.sa import get_session
    from app import main as main_mod

    async def _override_get_session():
        async with factory() as session:
            yield session

    app = main_mod.app
    app.dependency_overrides[get_session] = _override_get_session
    # 500 responses are asserted on, so app exceptions must not propagate
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as async_client:
            yield async_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
async def engine():
    # One shared in-memory connection so every session sees the same data
    eng = _make_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    yield eng
    await eng.dispose()


@pytest.fixture()
async def session_factory(engine):
    return await _seeded_factory(engine)


@pytest.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def client(session_factory):
    async with _client_for(session_factory) as async_client:
        yield async_client


@pytest.fixture()
async def pooled_client(tmp_path):
    """Client over a file database: each request gets its own connection."""
    eng = _make_engine(f"sqlite+aiosqlite:///{tmp_path / 'news.db'}")
    factory = await _seeded_factory(eng)
    async with _client_for(factory) as async_client:
        yield async_client
    await eng.dispose()
