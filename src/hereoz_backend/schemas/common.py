"""Response envelope and pagination schemas shared by every endpoint."""

import math
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from hereoz_backend.core.config import settings

DataT = TypeVar("DataT")


class Pagination(BaseModel):
    """Pagination block returned with list responses."""

    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, pages=math.ceil(total / limit) if limit else 0)


class Envelope(BaseModel, Generic[DataT]):
    """Standard `{data, message, pagination?}` response body."""

    data: Optional[DataT] = None
    message: Optional[str] = None
    pagination: Optional[Pagination] = None


class PageParams(BaseModel):
    """Page/limit query parameters."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=settings.default_page_size, ge=1, le=settings.max_page_size)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit
