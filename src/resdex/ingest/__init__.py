"""Resdex ingest pipeline: parsers and the filesystem loader."""

from resdex.ingest.base import BaseParser, slugify, walk_tree
from resdex.ingest.json_metadata import JsonMetadataParser
from resdex.ingest.loader import FilesystemLoader, build_hierarchy, default_loader
from resdex.ingest.markdown_comment import MarkdownCommentParser
from resdex.ingest.markdown_section import MarkdownSectionParser

__all__ = [
    "BaseParser",
    "FilesystemLoader",
    "JsonMetadataParser",
    "MarkdownCommentParser",
    "MarkdownSectionParser",
    "build_hierarchy",
    "default_loader",
    "slugify",
    "walk_tree",
]
