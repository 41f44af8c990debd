"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from resdex.registry.models import Importance, Resource, ResourceKind
from resdex.registry.registry import ResourceRegistry


class StaticLoader:
    """Loader double returning a fixed list (or raising) on each call."""

    def __init__(self, resources: list[Resource] | None = None) -> None:
        self.resources = resources or []
        self.error: Exception | None = None
        self.calls: list[Path] = []

    def load_all(self, root: Path) -> list[Resource]:
        self.calls.append(root)
        if self.error is not None:
            raise self.error
        return self.resources


def make_resource(
    id: str,
    kind: ResourceKind = ResourceKind.FILE,
    *,
    name: str | None = None,
    description: str | None = None,
    when_to_load: str | None = None,
    importance: Importance | str | None = None,
    children: list[Resource] | None = None,
    content: str | None = None,
) -> Resource:
    return Resource(
        id=id,
        name=name if name is not None else id,
        kind=kind,
        description=description,
        when_to_load=when_to_load,
        importance=Importance.parse(importance),
        children=tuple(children or ()),
        content=content,
    )


def make_registry(resources: list[Resource], tmp_path: Path) -> ResourceRegistry:
    registry = ResourceRegistry(tmp_path, StaticLoader(resources))
    registry.reload()
    return registry


GETTING_STARTED = """\
<!--
description: Install and first steps
whenToLoad: When onboarding a new developer
importance: high
-->

# Getting Started

Welcome.

## Install
<!--
description: Installation steps
-->

Run the installer.

## Usage

Call the tool.
"""

UNIT_TESTS = """\
<!--
description: Unit test conventions
priority: mid
-->
# Unit Tests

Keep them fast.

## Fixtures

Use tmp_path.
"""


@pytest.fixture
def resource_tree(tmp_path: Path) -> Path:
    """A small documentation tree on disk.

    docs/                      context  docs
      getting-started.md       file     docs|getting_started  (+3 sections)
      notes.md                 sections only (no metadata comment)
      misc/other.md            file     docs|other  (misc has no resource.json)
      testing/                 context  docs|testing
        unit-tests.md          file     docs|testing|unit_tests  (+2 sections)
    """
    root = tmp_path / "docs"
    root.mkdir()
    (root / "resource.json").write_text(
        json.dumps({"description": "Project documentation", "importance": "low"}),
        encoding="utf-8",
    )
    (root / "getting-started.md").write_text(GETTING_STARTED, encoding="utf-8")
    (root / "notes.md").write_text("# Notes\n\nScratch.\n", encoding="utf-8")

    misc = root / "misc"
    misc.mkdir()
    (misc / "other.md").write_text(
        "<!-- description: Loose notes -->\n# Other\n\nText.\n", encoding="utf-8"
    )

    testing = root / "testing"
    testing.mkdir()
    (testing / "resource.json").write_text(
        json.dumps(
            {"description": "Testing guides", "whenToLoad": "When writing tests", "importance": "mid"}
        ),
        encoding="utf-8",
    )
    (testing / "unit-tests.md").write_text(UNIT_TESTS, encoding="utf-8")
    return root
