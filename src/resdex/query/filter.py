"""Non-mutating de-duplication and predicate filtering."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

T = TypeVar("T")


def unique_by(items: Iterable[T], field: str) -> list[T]:
    """Keep the first item for each distinct value of attribute *field*.

    Order is preserved; later duplicates are dropped.
    """
    seen: set[Hashable] = set()
    result: list[T] = []
    for item in items:
        value = getattr(item, field)
        if value in seen:
            continue
        seen.add(value)
        result.append(item)
    return result


def filter_by(items: Iterable[T], predicate: Callable[[T], bool]) -> list[T]:
    return [item for item in items if predicate(item)]
