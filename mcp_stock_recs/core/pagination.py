"""
Pagination state transitions

Pure functions: no I/O, no store access. The store calls these to work
out the next criteria/page and the next list before committing anything.
"""
from typing import Sequence

from .domain import FilterCriteria, Recommendation


def validate_page(page: int) -> int:
    """Pages are 1-based integers"""
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValueError(f"page must be a positive integer, got {page!r}")
    return page


def begin_fetch(
    current: FilterCriteria,
    criteria: FilterCriteria,
    page: int,
    append: bool
) -> tuple[FilterCriteria, int]:
    """
    Resolve a list intent to the (criteria, page) pair to request.

    A fresh fetch adopts the new criteria and always starts at page 1.
    An append keeps the current criteria and takes the requested page.
    """
    validate_page(page)
    if not append:
        return criteria, 1
    return current, page


def merge_page(
    existing: Sequence[Recommendation],
    incoming: Sequence[Recommendation],
    append: bool,
    page: int
) -> tuple[Recommendation, ...]:
    """
    Extend or replace the held list with an incoming page.

    Only an append past page 1 extends; page 1 always replaces so a reset
    can't accumulate duplicates. Order is preserved, nothing is deduplicated.
    """
    if append and page > 1:
        return tuple(existing) + tuple(incoming)
    return tuple(incoming)
