"""Page slicing over any ordered sequence."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PaginationResult(Generic[T]):
    """One page of *items* plus the envelope echoed back to the caller."""

    items: list[T] = field(default_factory=list)
    page: int = 1
    limit: int = 15
    total: int = 0
    total_pages: int = 0


def paginate(items: Sequence[T], page: int, limit: int) -> PaginationResult[T]:
    """Slice ``[(page-1)*limit, page*limit)`` out of *items*.

    Out-of-range pages give an empty slice; *page* and *limit* are echoed
    verbatim, never clamped. A non-positive *limit* yields zero pages.
    """
    total = len(items)
    if limit <= 0:
        return PaginationResult(items=[], page=page, limit=limit, total=total, total_pages=0)

    start = (page - 1) * limit
    end = start + limit
    # Negative bounds would wrap around in Python slicing.
    window = list(items[max(start, 0) : max(end, 0)])
    return PaginationResult(
        items=window,
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
    )
