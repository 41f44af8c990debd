"""Tests for the resdex CLI commands (list, search, get, status, serve, version)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from resdex.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every command from an empty cwd with no global config or env overrides."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr("resdex.config._GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml")
    monkeypatch.delenv("RESDEX_RESOURCES_DIR", raising=False)
    monkeypatch.delenv("RESDEX_LOG_LEVEL", raising=False)


def _json(result) -> dict:
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "resdex" in result.output.lower()


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.startswith("resdex ")


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


def test_list_json(resource_tree: Path) -> None:
    payload = _json(runner.invoke(app, ["list", "--json", "--resources-dir", str(resource_tree)]))
    assert payload["total"] == 6
    assert payload["page"] == 1
    assert payload["limit"] == 15
    assert payload["resources"][0]["id"] == "docs|getting_started"


def test_list_prefix_and_paging(resource_tree: Path) -> None:
    payload = _json(
        runner.invoke(
            app,
            [
                "list", "--json", "--prefix", "docs|testing", "--limit", "1", "--page", "2",
                "-d", str(resource_tree),
            ],
        )
    )
    assert [r["id"] for r in payload["resources"]] == ["docs|testing|unit_tests"]
    assert payload["totalPages"] == 2


def test_list_table(resource_tree: Path) -> None:
    result = runner.invoke(app, ["list", "-d", str(resource_tree)])
    assert result.exit_code == 0
    assert "docs" in result.stdout
    assert "6 total" in result.stdout


def test_list_page_beyond_end(resource_tree: Path) -> None:
    result = runner.invoke(app, ["list", "--page", "9", "-d", str(resource_tree)])
    assert result.exit_code == 0
    assert "No resources on page 9" in result.stdout


def test_list_uses_env_resources_dir(resource_tree: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESDEX_RESOURCES_DIR", str(resource_tree))
    assert _json(runner.invoke(app, ["list", "--json"]))["total"] == 6


def test_list_uses_project_config(resource_tree: Path) -> None:
    Path("resdex.yaml").write_text(
        yaml.dump({"resources": {"dir": str(resource_tree)}, "pagination": {"default_limit": 2}}),
        encoding="utf-8",
    )
    payload = _json(runner.invoke(app, ["list", "--json"]))
    assert payload["limit"] == 2
    assert payload["totalPages"] == 3


def test_missing_resources_dir_exits_1(tmp_path: Path) -> None:
    result = runner.invoke(app, ["list", "-d", str(tmp_path / "missing")])
    assert result.exit_code == 1


def test_invalid_config_exits_1(resource_tree: Path) -> None:
    Path("resdex.yaml").write_text(
        yaml.dump({"pagination": {"default_limit": 0}}), encoding="utf-8"
    )
    result = runner.invoke(app, ["list", "-d", str(resource_tree)])
    assert result.exit_code == 1


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------


def test_search_json(resource_tree: Path) -> None:
    payload = _json(
        runner.invoke(app, ["search", "onboarding", "--json", "-d", str(resource_tree)])
    )
    assert [r["id"] for r in payload["resources"]] == ["docs|getting_started"]


def test_search_multiple_phrases(resource_tree: Path) -> None:
    payload = _json(
        runner.invoke(
            app,
            ["search", "installation steps", "testing guides", "--json", "-d", str(resource_tree)],
        )
    )
    assert payload["total"] == 2


def test_search_whole_word_only(resource_tree: Path) -> None:
    payload = _json(runner.invoke(app, ["search", "onboard", "--json", "-d", str(resource_tree)]))
    assert payload["resources"] == []


def test_search_blank_phrase_exits_1(resource_tree: Path) -> None:
    result = runner.invoke(app, ["search", "  ", "-d", str(resource_tree)])
    assert result.exit_code == 1


# ---------------------------------------------------------------------------
# get
# ---------------------------------------------------------------------------


def test_get_renders_content(resource_tree: Path) -> None:
    result = runner.invoke(app, ["get", "docs|getting_started", "-d", str(resource_tree)])
    assert result.exit_code == 0
    assert result.stdout.startswith("# getting-started")
    assert "Children" not in result.stdout


def test_get_with_children(resource_tree: Path) -> None:
    result = runner.invoke(app, ["get", "docs", "--children", "-d", str(resource_tree)])
    assert result.exit_code == 0
    assert "## Children (3)" in result.stdout
    assert "(docs|testing)" in result.stdout


def test_get_not_found_exits_1(resource_tree: Path) -> None:
    result = runner.invoke(app, ["get", "DOCS", "-d", str(resource_tree)])
    assert result.exit_code == 1


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------


def test_status_shows_counts(resource_tree: Path) -> None:
    result = runner.invoke(app, ["status", "-d", str(resource_tree)])
    assert result.exit_code == 0
    assert "context" in result.stdout
    assert "section" in result.stdout
    assert "12" in result.stdout


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


def test_serve_answers_requests_from_stdin(resource_tree: Path) -> None:
    requests = [
        {"jsonrpc": "2.0", "id": 1, "method": "initialize"},
        {
            "jsonrpc": "2.0",
            "id": 2,
            "method": "tools/call",
            "params": {"name": "getAvailableResources", "arguments": {"prefix": "docs|testing"}},
        },
    ]
    stdin = "".join(json.dumps(r) + "\n" for r in requests)
    result = runner.invoke(app, ["serve", "-d", str(resource_tree)], input=stdin)
    assert result.exit_code == 0

    responses = [json.loads(line) for line in result.stdout.splitlines()]
    assert [r["id"] for r in responses] == [1, 2]
    assert responses[0]["result"]["serverInfo"]["name"] == "resdex"
    payload = json.loads(responses[1]["result"]["content"][0]["text"])
    assert payload["total"] == 2
