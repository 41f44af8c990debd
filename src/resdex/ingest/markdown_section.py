"""Section parser: one section resource per Markdown heading.

Each ATX heading (``#`` … ``######``) plus its body up to the next heading is
a section. Ids are ``<context>|<file slug>|<heading slug>``. A comment block
directly under the heading supplies the section's metadata, using the same
keys as file-level comments. Headings inside fenced code blocks are ignored.
"""

from __future__ import annotations

import re
from pathlib import Path

from resdex.ingest.base import (
    BaseParser,
    Metadata,
    join_id,
    parse_metadata_block,
    read_text,
    slugify,
)
from resdex.registry.models import Resource, ResourceKind

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*$")
_CLOSING_HASHES_RE = re.compile(r"\s+#+$")
_LEADING_BLOCK_RE = re.compile(r"\A\s*<!--\s*(.*?)\s*-->", re.DOTALL)


def find_headings(text: str) -> list[tuple[int, str]]:
    """Return ``(offset, title)`` for every heading outside fenced code."""
    headings: list[tuple[int, str]] = []
    fence: str | None = None
    offset = 0
    for line in text.splitlines(keepends=True):
        stripped = line.strip()
        if fence:
            if stripped.startswith(fence):
                fence = None
        elif stripped.startswith(("```", "~~~")):
            fence = stripped[:3]
        else:
            m = _HEADING_RE.match(line)
            if m:
                title = _CLOSING_HASHES_RE.sub("", m.group(2)).strip()
                if title:
                    headings.append((offset, title))
        offset += len(line)
    return headings


class MarkdownSectionParser(BaseParser):
    def parse(self, root: Path) -> list[Resource]:
        resources: list[Resource] = []
        for entry in self._markdown_files(root):
            text = read_text(entry.path)
            if text is None:
                continue
            resources.extend(self._split(entry.path, entry.context_id, text))
        return resources

    def _split(self, path: Path, context_id: str, text: str) -> list[Resource]:
        file_slug = slugify(path.stem)
        if not file_slug:
            return []

        headings = find_headings(text)
        sections: list[Resource] = []
        for i, (start, title) in enumerate(headings):
            section_slug = slugify(title)
            if not section_slug:
                continue
            end = headings[i + 1][0] if i + 1 < len(headings) else len(text)
            body = text[start:end].strip()
            meta = self._section_metadata(body)
            sections.append(
                Resource(
                    id=join_id(context_id, file_slug, section_slug),
                    name=title,
                    kind=ResourceKind.SECTION,
                    description=meta.description,
                    when_to_load=meta.when_to_load,
                    importance=meta.importance,
                    content=body,
                )
            )
        return sections

    @staticmethod
    def _section_metadata(body: str) -> Metadata:
        # Skip the heading line itself.
        _, _, rest = body.partition("\n")
        m = _LEADING_BLOCK_RE.match(rest)
        return parse_metadata_block(m.group(1)) if m else Metadata()
