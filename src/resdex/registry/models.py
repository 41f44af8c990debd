"""Domain models for the resource registry.

A resource id is a chain of slug segments joined by ``SEPARATOR``; the chain
encodes ancestry (``docs|api|auth`` sits under ``docs|api``, which sits under
``docs``). Slugs never contain the separator, so prefix matching is unambiguous.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

SEPARATOR = "|"


class ResourceKind(str, Enum):
    CONTEXT = "context"  # directory grouping, no body
    FILE = "file"
    SECTION = "section"


class Importance(str, Enum):
    HIGH = "high"
    MID = "mid"
    LOW = "low"

    @classmethod
    def parse(cls, value: Any) -> Importance | None:
        """Return the matching tier for *value* (case-insensitive), else None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class Resource:
    id: str
    name: str
    kind: ResourceKind
    description: str | None = None
    when_to_load: str | None = None
    importance: Importance | None = None
    children: tuple[Resource, ...] = field(default_factory=tuple)
    content: str | None = None  # None for contexts

    def with_children(self, children: list[Resource] | tuple[Resource, ...]) -> Resource:
        return replace(self, children=tuple(children))


def parent_id(resource_id: str) -> str | None:
    """Return the id of the implied parent, or None for a top-level id."""
    head, sep, _ = resource_id.rpartition(SEPARATOR)
    return head if sep else None


def has_metadata(resource: Resource) -> bool:
    return bool(resource.description or resource.when_to_load or resource.importance)


def to_dict(resource: Resource) -> dict[str, str | None]:
    """Serialize *resource* for list/search responses (no content, no children).

    Absent optional fields are emitted as explicit ``None``.
    """
    return {
        "id": resource.id,
        "name": resource.name,
        "kind": resource.kind.value,
        "description": resource.description or None,
        "whenToLoad": resource.when_to_load or None,
        "importance": resource.importance.value if resource.importance else None,
    }
