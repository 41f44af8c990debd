"""File parser: Markdown files carrying a metadata comment block.

A file becomes a *file* resource when an HTML comment appears before its
first heading:

    <!--
    description: How the test suite is laid out
    whenToLoad: Before writing new tests
    importance: high
    -->

Files without such a block are not indexed as files (their headings may
still become sections).
"""

from __future__ import annotations

import re
from pathlib import Path

from resdex.ingest.base import BaseParser, join_id, parse_metadata_block, read_text, slugify
from resdex.ingest.markdown_section import find_headings
from resdex.registry.models import Resource, ResourceKind

_BLOCK_RE = re.compile(r"<!--\s*(.*?)\s*-->", re.DOTALL)


class MarkdownCommentParser(BaseParser):
    def parse(self, root: Path) -> list[Resource]:
        resources: list[Resource] = []
        for entry in self._markdown_files(root):
            resource = self._parse_file(entry.path, entry.context_id)
            if resource is not None:
                resources.append(resource)
        return resources

    def _parse_file(self, path: Path, context_id: str) -> Resource | None:
        text = read_text(path)
        if text is None:
            return None

        block = _BLOCK_RE.search(text)
        if not block:
            return None
        headings = find_headings(text)
        if headings and headings[0][0] < block.start():
            return None  # comment belongs to a section

        file_slug = slugify(path.stem)
        if not file_slug:
            return None

        meta = parse_metadata_block(block.group(1))
        return Resource(
            id=join_id(context_id, file_slug),
            name=path.stem,
            kind=ResourceKind.FILE,
            description=meta.description,
            when_to_load=meta.when_to_load,
            importance=meta.importance,
            content=text,
        )
