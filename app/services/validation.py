from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.core.errors import ValidationError

SORTABLE_ARTICLE_COLUMNS = frozenset(
    {"article_id", "title", "author", "topic", "created_at", "votes", "comment_count"}
)
ORDER_DIRECTIONS = ("asc", "desc")

DEFAULT_SORT_BY = "created_at"
DEFAULT_ORDER = "desc"

INVALID_ORDER_MSG = "Bad Request: Invalid order query"


@dataclass(frozen=True)
class ArticleQuery:
    sort_by: str = DEFAULT_SORT_BY
    order: str = DEFAULT_ORDER
    author: Optional[str] = None
    topic: Optional[str] = None


def validate_order(order: Optional[str]) -> str:
    """Return the sort direction; matching is case-sensitive."""
    if order is None:
        return DEFAULT_ORDER
    if order not in ORDER_DIRECTIONS:
        raise ValidationError(INVALID_ORDER_MSG)
    return order


def validate_article_query(
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
    author: Optional[str] = None,
    topic: Optional[str] = None,
) -> ArticleQuery:
    """
    Normalize listing parameters for /api/articles.

    `author` and `topic` are not checked here: whether they exist is only
    asked when the filtered read comes back empty.
    """
    if sort_by is None:
        sort_by = DEFAULT_SORT_BY
    elif sort_by not in SORTABLE_ARTICLE_COLUMNS:
        raise ValidationError("Bad Request")
    return ArticleQuery(sort_by=sort_by, order=validate_order(order), author=author, topic=topic)
