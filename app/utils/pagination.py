from __future__ import annotations
from typing import Any, List, Tuple

from fastapi import Query
from sqlalchemy.orm import Query as SAQuery

__all__ = ["PageParams", "paginate"]

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class PageParams:
    """``page``/``limit`` query parameters shared by the admin list endpoints."""

    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    ):
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def envelope(self, key: str, items: List[Any], total: int) -> dict:
        return {key: items, "total": total, "page": self.page, "limit": self.limit}


def paginate(query: SAQuery, params: PageParams) -> Tuple[List[Any], int]:
    total = query.order_by(None).count()
    return query.offset(params.offset).limit(params.limit).all(), total
