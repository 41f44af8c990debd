"""Shared CLI plumbing: config loading and registry construction."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from resdex.cli.errors import err_config_invalid, err_load_failed, err_resources_dir_missing
from resdex.config import ConfigError, ResdexConfig, configure_logging, load_config
from resdex.ingest.loader import default_loader
from resdex.registry.registry import LoadError, ResourceRegistry

err_console = Console(stderr=True)


def load_cli_config(resources_dir: Path | None) -> ResdexConfig:
    """Load config, apply the --resources-dir flag, and set up logging."""
    try:
        cfg = load_config()
    except ConfigError as exc:
        err_console.print(err_config_invalid(str(exc)))
        raise typer.Exit(1) from exc

    if resources_dir is not None:
        cfg.resources.dir = str(resources_dir)
    configure_logging(cfg.logging.level)
    return cfg


def open_registry(cfg: ResdexConfig) -> ResourceRegistry:
    """Build and load the registry for *cfg*, exiting with a message on failure."""
    root = cfg.resources_dir
    if not root.is_dir():
        err_console.print(err_resources_dir_missing(str(root)))
        raise typer.Exit(1)

    registry = ResourceRegistry(root, default_loader(cfg.resources.max_depth))
    try:
        registry.reload()
    except LoadError as exc:
        err_console.print(err_load_failed(str(exc)))
        raise typer.Exit(1) from exc
    return registry
