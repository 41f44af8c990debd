"""Presentation order for resources: importance tier, then id."""

from __future__ import annotations

from collections.abc import Iterable

from resdex.registry.models import Importance, Resource

IMPORTANCE_RANK: dict[Importance | None, int] = {
    Importance.HIGH: 0,
    Importance.MID: 1,
    Importance.LOW: 2,
    None: 3,
}


def sort_key(resource: Resource) -> tuple[int, str]:
    return IMPORTANCE_RANK.get(resource.importance, IMPORTANCE_RANK[None]), resource.id


def sort_resources(resources: Iterable[Resource]) -> list[Resource]:
    """Return a new list ordered high → mid → low → unset, ties by ascending id."""
    return sorted(resources, key=sort_key)
