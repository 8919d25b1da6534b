# app/api/articles.py
from fastapi import APIRouter, Depends, Path
from typing import Annotated, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.sa import get_session
from app.services import articles as svc
from app.models.schemas import (
    ArticleResponse,
    ArticlesResponse,
    CommentResponse,
    CommentsResponse,
    ErrorBody,
    INT4_MAX,
    INT4_MIN,
    NewComment,
    VotePatch,
)

router = APIRouter(prefix="/api/articles", tags=["articles"])

ArticleId = Annotated[int, Path(ge=INT4_MIN, le=INT4_MAX)]

_BAD_REQUEST = {400: {"model": ErrorBody}}
_NOT_FOUND = {404: {"model": ErrorBody}}


# -----------------------
#  Список
# -----------------------

@router.get("", response_model=ArticlesResponse, responses={**_BAD_REQUEST, **_NOT_FOUND},
            summary="Articles with comment counts, filtered and sorted")
async def api_list_articles(sort_by: Optional[str] = None,
                            order: Optional[str] = None,
                            author: Optional[str] = None,
                            topic: Optional[str] = None,
                            session: AsyncSession = Depends(get_session)):
    query = svc.validate_article_query(sort_by=sort_by, order=order, author=author, topic=topic)
    rows = await svc.list_articles(session, query)
    return {"articles": rows}


# -----------------------
#  Одиночная статья
# -----------------------

@router.get("/{article_id}", response_model=ArticleResponse, responses={**_BAD_REQUEST, **_NOT_FOUND},
            summary="Single article by id")
async def api_get_article(article_id: ArticleId, session: AsyncSession = Depends(get_session)):
    art = await svc.get_article(session, article_id)
    return {"article": art}


@router.patch("/{article_id}", response_model=ArticleResponse, responses={**_BAD_REQUEST, **_NOT_FOUND},
              summary="Increment (or decrement) article votes")
async def api_patch_article(article_id: ArticleId, payload: VotePatch,
                            session: AsyncSession = Depends(get_session)):
    art = await svc.patch_article_votes(session, article_id, payload.inc_votes)
    return {"article": art}


# -----------------------
#  Комментарии
# -----------------------

@router.get("/{article_id}/comments", response_model=CommentsResponse,
            responses={**_BAD_REQUEST, **_NOT_FOUND}, summary="Comments of an article")
async def api_list_comments(article_id: ArticleId,
                            sort_by: Optional[str] = None,
                            order: Optional[str] = None,
                            session: AsyncSession = Depends(get_session)):
    rows = await svc.list_comments(session, article_id, sort_by=sort_by, order=order)
    return {"comments": rows}


@router.post("/{article_id}/comments", response_model=CommentResponse, status_code=201,
             responses=_BAD_REQUEST, summary="Post a comment on an article")
async def api_post_comment(article_id: ArticleId, payload: NewComment,
                           session: AsyncSession = Depends(get_session)):
    comment = await svc.add_comment(session, article_id, payload.username, payload.body)
    return {"comment": comment}
