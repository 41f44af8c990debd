"""Tests for the resource data model."""

from __future__ import annotations

import dataclasses

import pytest

from conftest import make_resource
from resdex.registry.models import (
    Importance,
    ResourceKind,
    has_metadata,
    parent_id,
    to_dict,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("high", Importance.HIGH),
        ("MID", Importance.MID),
        (" low ", Importance.LOW),
        ("urgent", None),
        ("", None),
        (None, None),
        (3, None),
        (Importance.HIGH, Importance.HIGH),
    ],
)
def test_importance_parse(value, expected) -> None:
    assert Importance.parse(value) is expected


def test_parent_id_of_nested_id() -> None:
    assert parent_id("x|y|z") == "x|y"
    assert parent_id("x|y") == "x"


def test_parent_id_of_top_level_id_is_none() -> None:
    assert parent_id("x") is None


def test_resource_is_immutable() -> None:
    r = make_resource("a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.name = "b"  # type: ignore[misc]


def test_with_children_returns_new_value() -> None:
    child = make_resource("a|b")
    parent = make_resource("a")
    nested = parent.with_children([child])
    assert nested.children == (child,)
    assert parent.children == ()


def test_has_metadata() -> None:
    assert not has_metadata(make_resource("s", ResourceKind.SECTION))
    assert has_metadata(make_resource("s", ResourceKind.SECTION, description="d"))
    assert has_metadata(make_resource("s", ResourceKind.SECTION, when_to_load="w"))
    assert has_metadata(make_resource("s", ResourceKind.SECTION, importance="low"))


def test_to_dict_emits_explicit_nulls() -> None:
    data = to_dict(make_resource("a|b", ResourceKind.SECTION, name="B"))
    assert data == {
        "id": "a|b",
        "name": "B",
        "kind": "section",
        "description": None,
        "whenToLoad": None,
        "importance": None,
    }


def test_to_dict_omits_content_and_children() -> None:
    r = make_resource(
        "a",
        description="desc",
        when_to_load="when",
        importance="high",
        content="body",
        children=[make_resource("a|b")],
    )
    data = to_dict(r)
    assert "content" not in data
    assert "children" not in data
    assert data["importance"] == "high"
    assert data["whenToLoad"] == "when"
