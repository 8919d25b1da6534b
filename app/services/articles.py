"""Compatibility façade that re-exports article service functions.

Routers import this module so tests can patch a single location.
"""

from .articles_read import get_article, list_articles  # noqa: F401
from .articles_write import patch_article_votes  # noqa: F401
from .comments import add_comment, list_comments  # noqa: F401
from .validation import validate_article_query  # noqa: F401

__all__ = [
    "get_article",
    "list_articles",
    "patch_article_votes",
    "add_comment",
    "list_comments",
    "validate_article_query",
]
