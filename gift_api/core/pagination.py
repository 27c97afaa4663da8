"""
Paging primitives shared by the products router and the service layer.

A ``Pageable`` is what the router hands to the service: a 0-based page
number, a page size and an ordered list of sort orders. A ``Page`` is what
comes back: one slice of results plus the totals needed to render paging
metadata.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from fastapi import Query

from gift_api.core.config import settings
from gift_api.core.errors import InvalidArgumentError


T = TypeVar("T")


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Order:
    field: str
    direction: Direction = Direction.ASC

    @property
    def descending(self) -> bool:
        return self.direction is Direction.DESC


@dataclass(frozen=True)
class Pageable:
    page: int
    size: int
    sort: tuple = field(default_factory=tuple)

    @property
    def offset(self) -> int:
        return self.page * self.size

    def with_size(self, size: int) -> "Pageable":
        """Same page number and sort, new size."""
        return replace(self, size=size)


@dataclass(frozen=True)
class Page(Generic[T]):
    content: List[T]
    pageable: Pageable
    total_elements: int

    @property
    def number(self) -> int:
        return self.pageable.page

    @property
    def size(self) -> int:
        return self.pageable.size

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return (self.total_elements + self.size - 1) // self.size

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages


def parse_order(raw: str) -> Order:
    """
    Parse one Spring style sort token: ``name`` or ``name,desc``.
    """
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    if not parts:
        raise InvalidArgumentError(f"Invalid sort parameter: '{raw}'")

    if len(parts) == 1:
        return Order(parts[0])

    if len(parts) > 2:
        raise InvalidArgumentError(f"Invalid sort parameter: '{raw}'")

    try:
        direction = Direction(parts[1].lower())
    except ValueError:
        raise InvalidArgumentError(
            f"Invalid sort direction '{parts[1]}', expected asc or desc"
        )
    return Order(parts[0], direction)


def default_pageable() -> Pageable:
    return Pageable(
        page=0,
        size=settings.DEFAULT_PAGE_SIZE,
        sort=(Order(settings.DEFAULT_SORT, Direction.ASC),),
    )


def pageable_params(
    page: int = Query(0),
    sort: Optional[List[str]] = Query(None),
) -> Pageable:
    """
    Build the framework-level default pageable (page size 20, sorted by name
    ascending). ``size`` is not read here; the products router
    applies it as an explicit, bounds-checked override.

    A negative page falls back to 0 and blank ``sort`` values are ignored.
    """
    base = default_pageable()
    tokens = [s for s in (sort or []) if s.strip(", ")]
    orders = tuple(parse_order(s) for s in tokens) if tokens else base.sort
    return Pageable(page=max(page, 0), size=base.size, sort=orders)


def override_size(pageable: Pageable, size: Optional[int]) -> Pageable:
    if size is None:
        return pageable

    if size < 1 or size > settings.MAX_PAGE_SIZE:
        raise InvalidArgumentError(
            f"size must be between 1 and {settings.MAX_PAGE_SIZE}"
        )

    return pageable.with_size(size)
