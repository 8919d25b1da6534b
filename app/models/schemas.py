# app/models/schemas.py
from pydantic import BaseModel, Field, StrictInt, field_validator
from typing import Annotated, List
from datetime import datetime


class Topic(BaseModel):
    slug: str
    description: str


# --- Article as listed by /api/articles (no body) ---
class ArticleSummary(BaseModel):
    article_id: int
    title: str
    author: str
    topic: str
    created_at: datetime
    votes: int
    # Aggregate count, kept as a string on the wire for existing consumers
    comment_count: str

    @field_validator("comment_count", mode="before")
    def count_to_str(cls, v):
        return str(v)


# --- Full article for /api/articles/{article_id} ---
class Article(ArticleSummary):
    body: str


class Comment(BaseModel):
    comment_id: int
    votes: int
    created_at: datetime
    author: str
    body: str
    belongs_to: int


# --- Requests ---
# Integer columns are 32-bit; larger values never reach the store
INT4_MIN = -2**31
INT4_MAX = 2**31 - 1

Int4 = Annotated[StrictInt, Field(ge=INT4_MIN, le=INT4_MAX)]


class VotePatch(BaseModel):
    inc_votes: Int4


class NewComment(BaseModel):
    username: str
    body: str


# --- Envelopes ---
class TopicsResponse(BaseModel):
    topics: List[Topic]


class ArticlesResponse(BaseModel):
    articles: List[ArticleSummary]


class ArticleResponse(BaseModel):
    article: Article


class CommentsResponse(BaseModel):
    comments: List[Comment]


class CommentResponse(BaseModel):
    comment: Comment


class ErrorBody(BaseModel):
    msg: str
