"""Filesystem loader: runs every parser over the resources root.

Parser output is concatenated in parser order, then nested: each resource
whose parent id belongs to another loaded resource becomes that resource's
child. Resources without a loaded parent stay at the top level.
"""

from __future__ import annotations

from pathlib import Path

from resdex.ingest.base import DEFAULT_MAX_DEPTH, BaseParser
from resdex.ingest.json_metadata import JsonMetadataParser
from resdex.ingest.markdown_comment import MarkdownCommentParser
from resdex.ingest.markdown_section import MarkdownSectionParser
from resdex.registry.models import SEPARATOR, Resource, parent_id
from resdex.registry.registry import LoadError


class FilesystemLoader:
    def __init__(self, parsers: list[BaseParser]) -> None:
        self.parsers = parsers

    def load_all(self, root: Path) -> list[Resource]:
        """Parse *root* with every parser and return the nested resource list.

        Raises:
            LoadError: if *root* is not a directory or a parser fails.
        """
        if not root.is_dir():
            raise LoadError(f"Resources directory not found: '{root}'")

        flat: list[Resource] = []
        for parser in self.parsers:
            try:
                flat.extend(parser.parse(root))
            except (OSError, ValueError) as exc:
                raise LoadError(
                    f"{type(parser).__name__} failed on '{root}': {exc}"
                ) from exc
        return build_hierarchy(flat)


def build_hierarchy(resources: list[Resource]) -> list[Resource]:
    """Nest *resources* under their parent ids; return the top-level list.

    Children keep input order. Children a resource already carries are kept
    ahead of newly attached ones. Duplicate ids are left in place so the
    registry can report them; the last one is used as the parent.
    """
    index_of = {r.id: i for i, r in enumerate(resources)}
    kids: dict[int, list[int]] = {}
    attached: set[int] = set()
    for i, r in enumerate(resources):
        pid = parent_id(r.id)
        if pid is not None and pid in index_of and index_of[pid] != i:
            kids.setdefault(index_of[pid], []).append(i)
            attached.add(i)

    # Deepest ids first, so every child is built before its parent.
    order = sorted(range(len(resources)), key=lambda i: -resources[i].id.count(SEPARATOR))
    built: dict[int, Resource] = {}
    for i in order:
        r = resources[i]
        if i in kids:
            r = r.with_children(list(r.children) + [built[k] for k in kids[i]])
        built[i] = r

    return [built[i] for i in range(len(resources)) if i not in attached]


def default_loader(max_depth: int = DEFAULT_MAX_DEPTH) -> FilesystemLoader:
    """Loader with the standard parser chain: contexts, files, sections."""
    return FilesystemLoader(
        [
            JsonMetadataParser(max_depth=max_depth),
            MarkdownCommentParser(max_depth=max_depth),
            MarkdownSectionParser(max_depth=max_depth),
        ]
    )
