"""Search, filter and paginate records that were fetched in one go."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ListQuery(BaseModel):
    """Parameters of a list view."""

    search: str = Field(default="", description="Case-insensitive substring")
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)
    filters: dict[str, str] = Field(default_factory=dict)


class Page(BaseModel, Generic[T]):
    """One page of a list view plus the numbers needed to render a pager."""

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int
    first_index: int
    last_index: int


def _field_text(record: Any, field: str) -> str:
    if isinstance(record, dict):
        value = record.get(field)
    else:
        value = getattr(record, field, None)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def matches_search(record: Any, search: str, fields: Sequence[str]) -> bool:
    term = search.strip().lower()
    if not term:
        return True
    return any(term in _field_text(record, f).lower() for f in fields)


def matches_filters(record: Any, filters: dict[str, str]) -> bool:
    for field, expected in filters.items():
        if expected is None or expected == "":
            continue
        if _field_text(record, field).lower() != str(expected).lower():
            return False
    return True


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice ``items`` into the requested 1-based page."""
    total = len(items)
    total_pages = math.ceil(total / page_size) if total else 0
    start = (page - 1) * page_size
    window = list(items[start : start + page_size])

    if window:
        first_index = start + 1
        last_index = start + len(window)
    else:
        first_index = last_index = 0

    return Page(
        items=window,
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        first_index=first_index,
        last_index=last_index,
    )


def apply_query(
    records: Iterable[T],
    query: ListQuery,
    search_fields: Sequence[str],
    max_page_size: int | None = None,
    transform: Callable[[T], Any] | None = None,
) -> Page:
    """Filter ``records`` by ``query`` and return the requested page.

    ``transform`` is applied to the page's items only, after filtering.
    """
    page_size = query.page_size
    if max_page_size is not None:
        page_size = min(page_size, max_page_size)

    selected = [
        r
        for r in records
        if matches_search(r, query.search, search_fields)
        and matches_filters(r, query.filters)
    ]
    page = paginate(selected, query.page, page_size)
    if transform is not None:
        page = Page(
            **{**page.model_dump(exclude={"items"}), "items": [transform(i) for i in page.items]}
        )
    return page
