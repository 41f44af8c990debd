"""In-memory resource registry.

The registry owns one flat ``id -> Resource`` snapshot. ``reload()`` asks the
loader for a (possibly nested) resource list, flattens it depth-first into a
fresh dict and swaps that dict in whole. Readers always see either the old or
the new snapshot, never a half-built one.

Reload-failure policy: if the loader raises, the previous snapshot stays in
place and the error propagates to the caller.
"""

from __future__ import annotations

import logging
import re
import threading
from pathlib import Path
from typing import Protocol

from resdex.registry.models import SEPARATOR, Resource

logger = logging.getLogger(__name__)


class LoadError(RuntimeError):
    """Raised when the resource source cannot produce a resource list."""


class ResourceLoader(Protocol):
    def load_all(self, root: Path) -> list[Resource]: ...


class ResourceRegistry:
    """Flat, addressable index over every loaded resource.

    Usage:
        registry = ResourceRegistry(Path("resources"), FilesystemLoader(parsers))
        registry.reload()
        registry.get_by_prefix("tests")
    """

    def __init__(self, base_dir: Path, loader: ResourceLoader) -> None:
        self.base_dir = Path(base_dir).resolve()
        self._loader = loader
        self._index: dict[str, Resource] = {}
        self._loaded = False
        self._lock = threading.Lock()
        self._reload_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def reload(self) -> None:
        """Rebuild the index from the loader and swap it in.

        Raises:
            LoadError: (or whatever the loader raises) if loading fails; the
                previous snapshot is kept.
        """
        with self._reload_lock:
            resources = self._loader.load_all(self.base_dir)
            index = self._flatten(resources)
            with self._lock:
                self._index = index
                self._loaded = True
        logger.info("Registry reloaded (count=%d, base_dir=%s)", len(index), self.base_dir)

    @staticmethod
    def _flatten(resources: list[Resource]) -> dict[str, Resource]:
        """Depth-first flatten with an explicit stack; later duplicates win."""
        index: dict[str, Resource] = {}
        stack = list(reversed(resources))
        while stack:
            resource = stack.pop()
            if resource.id in index:
                logger.warning(
                    "Duplicate resource id '%s'; keeping the later %s record",
                    resource.id,
                    resource.kind.value,
                )
            index[resource.id] = resource
            stack.extend(reversed(resource.children))
        return index

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def count(self) -> int:
        return len(self._snapshot())

    def _snapshot(self) -> dict[str, Resource]:
        with self._lock:
            return self._index

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self) -> list[Resource]:
        return list(self._snapshot().values())

    def get_by_id(self, resource_id: str) -> Resource | None:
        """Exact, case-sensitive lookup. Empty ids never match."""
        if not resource_id:
            return None
        return self._snapshot().get(resource_id)

    def get_by_prefix(self, prefix: str) -> list[Resource]:
        """Return the resource *prefix* names plus everything beneath it.

        Case-insensitive. ``"tests"`` matches ``tests`` and ``tests|unit`` but
        not ``testsuite``. An empty prefix matches nothing (use ``get_all``),
        and a prefix ending in the separator matches nothing either.
        """
        if not prefix:
            return []
        p = prefix.lower()
        child_prefix = p + SEPARATOR
        return [
            r
            for r in self._snapshot().values()
            if r.id.lower() == p or r.id.lower().startswith(child_prefix)
        ]

    def search_by_phrases(self, phrases: list[str]) -> list[Resource]:
        """Case-insensitive whole-word OR search over name, description and when-to-load.

        Phrases are matched literally; ``"test"`` does not match ``"Testing"``.
        Blank phrases are ignored.
        """
        patterns = [
            re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)
            for phrase in phrases
            if phrase and phrase.strip()
        ]
        if not patterns:
            return []

        results: list[Resource] = []
        for r in self._snapshot().values():
            haystack = "\n".join((r.name, r.description or "", r.when_to_load or ""))
            if any(p.search(haystack) for p in patterns):
                results.append(r)
        return results
