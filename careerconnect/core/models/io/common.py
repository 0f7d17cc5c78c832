"""
Pagination envelopes shared by the list endpoints.

The recruiting screens and the Qurban dashboard were built separately and
page their tables with differently shaped metadata, so both shapes exist.
"""

from __future__ import annotations

from pydantic import BaseModel


def _page_count(total: int, size: int) -> int:
    return (total + size - 1) // size if size > 0 else 0


class Pagination(BaseModel):
    """Paging metadata for recruiting lists."""

    page: int
    limit: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        pages = _page_count(total, limit)
        return cls(
            page=page,
            limit=limit,
            total_count=total,
            total_pages=pages,
            has_next_page=page < pages,
            has_prev_page=page > 1,
        )


class QurbanPagination(BaseModel):
    """Paging metadata for Qurban dashboard tables."""

    current_page: int
    total_pages: int
    page_size: int
    total: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, page_size: int, total: int) -> "QurbanPagination":
        pages = _page_count(total, page_size)
        return cls(
            current_page=page,
            total_pages=pages,
            page_size=page_size,
            total=total,
            has_next=page < pages,
            has_prev=page > 1,
        )
