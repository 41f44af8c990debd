"""resdex serve command: JSON-RPC over stdio."""

from __future__ import annotations

import importlib.metadata
import sys
from pathlib import Path
from typing import Annotated

import typer

from resdex.cli.context import load_cli_config, open_registry
from resdex.server import ResourceServer


def package_version() -> str:
    try:
        return importlib.metadata.version("resdex")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def serve_cmd(
    resources_dir: Annotated[
        Path | None,
        typer.Option("--resources-dir", "-d", help="Resources root (overrides config)."),
    ] = None,
) -> None:
    """Index resources once, then answer tool calls on stdin/stdout until EOF."""
    cfg = load_cli_config(resources_dir)
    registry = open_registry(cfg)
    server = ResourceServer(
        registry,
        version=package_version(),
        default_limit=cfg.pagination.default_limit,
    )
    server.serve(sys.stdin, sys.stdout)
