"""Context parser: one context resource per directory with resource.json."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from resdex.ingest.base import CONTEXT_FILENAME, BaseParser, read_text, walk_tree
from resdex.registry.models import Importance, Resource, ResourceKind

logger = logging.getLogger(__name__)


def _opt_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


class JsonMetadataParser(BaseParser):
    """Turn every ``resource.json`` sidecar into a *context* resource.

    The context is named after its directory; its id is the chain of enclosing
    context slugs. Recognised keys: ``description``, ``whenToLoad``,
    ``importance``. Invalid JSON or a non-object document is logged and skipped.
    """

    def parse(self, root: Path) -> list[Resource]:
        if not root.is_dir():
            return []

        resources: list[Resource] = []
        for entry in walk_tree(root, self.max_depth):
            if not entry.opens_context:
                continue
            resource = self._parse_sidecar(entry.path, entry.context_id)
            if resource is not None:
                resources.append(resource)
        return resources

    def _parse_sidecar(self, directory: Path, context_id: str) -> Resource | None:
        sidecar = directory / CONTEXT_FILENAME
        text = read_text(sidecar)
        if text is None:
            return None

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Invalid JSON in %s: %s", sidecar, exc)
            return None
        if not isinstance(raw, dict):
            logger.warning("Expected a JSON object in %s, got %s", sidecar, type(raw).__name__)
            return None
        if not context_id:
            logger.warning("Directory name %r has no usable slug; skipped", directory.name)
            return None

        return Resource(
            id=context_id,
            name=directory.name,
            kind=ResourceKind.CONTEXT,
            description=_opt_str(raw.get("description")),
            when_to_load=_opt_str(raw.get("whenToLoad")),
            importance=Importance.parse(raw.get("importance")),
            content=None,
        )
