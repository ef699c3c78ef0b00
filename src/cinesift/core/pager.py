"""Pager — Normalizes page parameters and assembles page results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from cinesift.exceptions import InvalidPaginationError
from cinesift.models.page import PageRequest, PageResult

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20


class Pager:
    """Turns page/size parameters into offset/limit windows.

    A non-positive page size is replaced by ``default_size``; a negative
    page index is rejected. Sizes above ``max_size`` are clamped when a
    maximum is configured.
    """

    def __init__(self, default_size: int = DEFAULT_PAGE_SIZE, max_size: int | None = None) -> None:
        if default_size <= 0:
            raise ValueError(f"default_size must be > 0, got {default_size}")
        if max_size is not None and max_size < default_size:
            raise ValueError(f"max_size ({max_size}) must be >= default_size ({default_size})")
        self.default_size = default_size
        self.max_size = max_size

    def request(self, page: int, size: int) -> PageRequest:
        """Validate and normalize ``page``/``size`` into a :class:`PageRequest`.

        Raises:
            InvalidPaginationError: If ``page`` is negative.
        """
        if page < 0:
            raise InvalidPaginationError(f"page index must be >= 0, got {page}")
        limit = size if size > 0 else self.default_size
        if self.max_size is not None:
            limit = min(limit, self.max_size)
        return PageRequest(page=page, size=limit)

    def normalize(self, page: int, size: int) -> tuple[int, int]:
        """Return ``(offset, limit)`` for ``page``/``size``.

        >>> Pager().normalize(2, 0)
        (40, 20)
        """
        request = self.request(page, size)
        return request.offset, request.size

    @staticmethod
    def assemble(items: Sequence[T], page_request: PageRequest, total: int) -> PageResult[T]:
        """Package materialized records into a :class:`PageResult`."""
        return PageResult(items=list(items), page_request=page_request, total=max(total, len(items)))
