"""Pagination models — Page requests and generic page results."""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

T = TypeVar("T")


class PageRequest(BaseModel):
    """A zero-based page window."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=0, description="Zero-based page index")
    size: int = Field(gt=0, description="Page size")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def offset(self) -> int:
        return self.page * self.size


class PageResult(BaseModel, Generic[T]):
    """One page of materialized records plus the total match count.

    ``items`` may hold fewer than ``page_request.size`` records only on
    the last page.
    """

    items: list[T] = Field(default_factory=list, description="Records on this page, in engine order")
    page_request: PageRequest = Field(description="The window that produced this page")
    total: int = Field(ge=0, description="Total number of matches across all pages")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        if self.total <= 0:
            return 0
        return math.ceil(self.total / self.page_request.size)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next(self) -> bool:
        return self.page_request.page + 1 < self.total_pages

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous(self) -> bool:
        return self.page_request.page > 0
