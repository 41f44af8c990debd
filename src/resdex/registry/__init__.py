"""Resource registry: data model and the flat in-memory index."""

from resdex.registry.models import (
    SEPARATOR,
    Importance,
    Resource,
    ResourceKind,
    has_metadata,
    parent_id,
    to_dict,
)
from resdex.registry.registry import LoadError, ResourceLoader, ResourceRegistry

__all__ = [
    "SEPARATOR",
    "Importance",
    "LoadError",
    "Resource",
    "ResourceKind",
    "ResourceLoader",
    "ResourceRegistry",
    "has_metadata",
    "parent_id",
    "to_dict",
]
