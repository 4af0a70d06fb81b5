from typing import Any

from pydantic import BaseModel, Field

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class ListQuery(BaseModel):
    """Request-time pagination parameters for list endpoints."""

    page: int = Field(DEFAULT_PAGE, description="1-based page number")
    limit: int = Field(DEFAULT_LIMIT, description="Maximum items per page")


class PageWindow(BaseModel):
    """A find() filter plus the skip/limit/sort that select one page."""

    filter: dict[str, Any] = Field(default_factory=dict)
    skip: int = Field(..., ge=0)
    limit: int = Field(..., ge=1)
    sort: list[tuple[str, int]]
