"""Helpers shared by the API routers."""

from typing import Any, Iterable, Optional

from fastapi import Query

from hereoz_backend.core.config import settings
from hereoz_backend.schemas.common import PageParams, Pagination


def page_params(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Page size")
) -> PageParams:
    return PageParams(page=page, limit=limit)


def paginated(items: Iterable[Any], total: int, params: PageParams, message: Optional[str] = None) -> dict:
    return {
        "data": list(items),
        "message": message,
        "pagination": Pagination.build(total, params.page, params.limit),
    }
