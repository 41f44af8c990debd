"""Base parser interface and shared helpers for all resource parsers.

Every parser receives the resources root and returns a flat list of
Resources. Context nesting is decided by ``walk_tree()``: a directory that
holds ``resource.json`` opens a context, and its slug becomes a segment of
every id found beneath it.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from resdex.registry.models import SEPARATOR, Importance, Resource

logger = logging.getLogger(__name__)

CONTEXT_FILENAME = "resource.json"
DEFAULT_MAX_DEPTH = 10

_SLUG_RE = re.compile(r"[^a-z0-9]+")
# key: value lines inside an HTML comment block
_KV_RE = re.compile(r"^\s*([a-zA-Z][\w-]*?)\s*:\s*(.+?)\s*$")


def slugify(text: str) -> str:
    """Lowercase *text* and collapse non-alphanumeric runs to ``_``.

    The result never starts or ends with ``_`` and never contains the id
    separator.
    """
    return _SLUG_RE.sub("_", text.lower()).strip("_")


def join_id(*segments: str) -> str:
    return SEPARATOR.join(s for s in segments if s)


@dataclass
class Metadata:
    description: str | None = None
    when_to_load: str | None = None
    importance: Importance | None = None


def parse_metadata_block(block: str) -> Metadata:
    """Parse ``key: value`` lines from the inside of an HTML comment.

    Recognised keys (case-insensitive): description, whenToLoad / whenLoad,
    importance / priority. Importance values other than high/mid/low are
    ignored.
    """
    meta = Metadata()
    for line in block.splitlines():
        m = _KV_RE.match(line)
        if not m:
            continue
        key = m.group(1).lower()
        value = m.group(2)
        if key == "description":
            meta.description = value
        elif key in ("whentoload", "whenload"):
            meta.when_to_load = value
        elif key in ("importance", "priority"):
            meta.importance = Importance.parse(value)
    return meta


@dataclass
class WalkEntry:
    path: Path
    context_id: str  # id of the innermost enclosing context ("" if none)
    is_dir: bool
    opens_context: bool = False  # directory holding resource.json


def walk_tree(root: Path, max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[WalkEntry]:
    """Yield every directory and file under *root* (inclusive), sorted by name.

    Directories deeper than *max_depth* below *root* are not entered. Hidden
    entries (dot-prefixed) are skipped. Directories that cannot be listed are
    logged and skipped.
    """
    stack: list[tuple[Path, str, int]] = [(root, "", 0)]
    while stack:
        directory, parent_ctx, depth = stack.pop()
        opens = (directory / CONTEXT_FILENAME).is_file()
        ctx = join_id(parent_ctx, slugify(directory.name)) if opens else parent_ctx
        yield WalkEntry(path=directory, context_id=ctx, is_dir=True, opens_context=opens)

        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            logger.warning("Cannot read directory %s: %s", directory, exc)
            continue

        subdirs: list[Path] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue
            if entry.is_dir():
                subdirs.append(entry)
            elif entry.is_file():
                yield WalkEntry(path=entry, context_id=ctx, is_dir=False)

        if depth < max_depth:
            for sub in reversed(subdirs):
                stack.append((sub, ctx, depth + 1))
        elif subdirs:
            logger.warning("Max depth %d reached at %s; not descending", max_depth, directory)


def read_text(path: Path) -> str | None:
    """Read *path* as UTF-8; log and return None if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return None


class BaseParser(ABC):
    """Abstract base for all resource parsers."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.max_depth = max_depth

    @abstractmethod
    def parse(self, root: Path) -> list[Resource]:
        """Return every resource this parser finds under *root*.

        Args:
            root: Resources root directory (or a single file for the
                Markdown parsers).

        Returns:
            Flat list of Resources with fully qualified ids.
        """

    def _markdown_files(self, root: Path) -> Iterator[WalkEntry]:
        if root.is_file():
            if root.suffix == ".md":
                yield WalkEntry(path=root, context_id="", is_dir=False)
            return
        if not root.is_dir():
            return
        for entry in walk_tree(root, self.max_depth):
            if not entry.is_dir and entry.path.suffix == ".md":
                yield entry
