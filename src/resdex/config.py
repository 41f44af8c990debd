"""Resdex configuration loader.

Priority (high → low):
  1. CLI flags           (handled at call site, not in this module)
  2. Environment variables  (RESDEX_RESOURCES_DIR, RESDEX_LOG_LEVEL)
  3. Per-project resdex.yaml  (in the working directory)
  4. Global ~/.resdex/config.yaml
  5. Hardcoded defaults

All YAML reads use yaml.safe_load(), never yaml.load().
"""

from __future__ import annotations

import logging
import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.logging import RichHandler

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_GLOBAL_CONFIG_DIR: Path = Path.home() / ".resdex"
_GLOBAL_CONFIG_PATH: Path = _GLOBAL_CONFIG_DIR / "config.yaml"
_PROJECT_CONFIG_NAME: str = "resdex.yaml"

# Known top-level sections; unknown keys produce a warning
_KNOWN_SECTIONS: frozenset[str] = frozenset(["resources", "pagination", "logging"])

_LOG_LEVELS: frozenset[str] = frozenset(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file contains an invalid value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class ResourcesCfg:
    """Where resources live (resdex.yaml: resources:).

    Attributes:
        dir: Resources root. Relative paths resolve against the directory the
            config was loaded for.
        max_depth: How many directory levels below the root are scanned.
    """

    dir: str = "resources"
    max_depth: int = 10


@dataclass
class PaginationCfg:
    """List/search paging defaults (resdex.yaml: pagination:)."""

    default_limit: int = 15


@dataclass
class LoggingCfg:
    """Diagnostics on stderr (resdex.yaml: logging:)."""

    level: str = "WARNING"


@dataclass
class ResdexConfig:
    """Root configuration object, built by load_config() from merged YAML layers."""

    resources: ResourcesCfg = field(default_factory=ResourcesCfg)
    pagination: PaginationCfg = field(default_factory=PaginationCfg)
    logging: LoggingCfg = field(default_factory=LoggingCfg)
    base_dir: Path = field(default_factory=Path.cwd)

    @property
    def resources_dir(self) -> Path:
        """Absolute resources root."""
        path = Path(self.resources.dir).expanduser()
        return path if path.is_absolute() else (self.base_dir / path).resolve()


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}'; ignored.",
                UserWarning,
                stacklevel=4,
            )


def _validate(cfg: ResdexConfig) -> None:
    if cfg.resources.max_depth < 0:
        raise ConfigError(
            f"resources.max_depth must be >= 0, got {cfg.resources.max_depth}"
        )
    if cfg.pagination.default_limit < 1:
        raise ConfigError(
            f"pagination.default_limit must be >= 1, got {cfg.pagination.default_limit}"
        )
    if cfg.logging.level not in _LOG_LEVELS:
        raise ConfigError(
            f"logging.level must be one of {', '.join(sorted(_LOG_LEVELS))}, "
            f"got '{cfg.logging.level}'"
        )


# ---------------------------------------------------------------------------
# Merge + build
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict that is *base* deep-merged with *override*."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping at the top level.")
    return raw


def _cfg_from_dict(data: dict[str, Any], base_dir: Path) -> ResdexConfig:
    """Build a *ResdexConfig* from a merged raw YAML dict."""
    cfg = ResdexConfig(base_dir=base_dir)

    try:
        if "resources" in data:
            r = data["resources"] or {}
            cfg.resources = ResourcesCfg(
                dir=str(r.get("dir", cfg.resources.dir)),
                max_depth=int(r.get("max_depth", cfg.resources.max_depth)),
            )

        if "pagination" in data:
            p = data["pagination"] or {}
            cfg.pagination = PaginationCfg(
                default_limit=int(p.get("default_limit", cfg.pagination.default_limit)),
            )

        if "logging" in data:
            lg = data["logging"] or {}
            cfg.logging = LoggingCfg(level=str(lg.get("level", cfg.logging.level)).upper())
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(f"Invalid config value: {exc}") from exc

    return cfg


def _apply_env_overrides(cfg: ResdexConfig) -> ResdexConfig:
    """Apply RESDEX_* environment variable overrides (layer 2)."""
    if resources_dir := os.environ.get("RESDEX_RESOURCES_DIR"):
        cfg.resources.dir = resources_dir
    if level := os.environ.get("RESDEX_LOG_LEVEL"):
        cfg.logging.level = level.upper()
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    project_dir: Path | None = None,
    *,
    global_config_path: Path | None = None,
) -> ResdexConfig:
    """Load and return a merged *ResdexConfig*.

    Applies layers in order: global → per-project → env vars.
    CLI flag overrides must be applied by the caller after this function.

    Args:
        project_dir: Directory to search for *resdex.yaml*. Defaults to CWD.
            Relative ``resources.dir`` values resolve against it.
        global_config_path: Override the global config path (for testing).

    Returns:
        Fully merged *ResdexConfig* with env var overrides applied.

    Raises:
        ConfigError: If a config file is malformed or a value is out of range.
    """
    global_path = global_config_path if global_config_path is not None else _GLOBAL_CONFIG_PATH
    search_dir = project_dir if project_dir is not None else Path.cwd()

    merged: dict[str, Any] = {}

    # Layer 1: global config
    if global_path.exists():
        raw_global = _read_yaml(global_path)
        _warn_unknown_keys(raw_global, global_path)
        merged = _deep_merge(merged, raw_global)

    # Layer 2: per-project config
    project_cfg_path = search_dir / _PROJECT_CONFIG_NAME
    if project_cfg_path.exists():
        raw_project = _read_yaml(project_cfg_path)
        _warn_unknown_keys(raw_project, project_cfg_path)
        merged = _deep_merge(merged, raw_project)

    cfg = _cfg_from_dict(merged, search_dir)

    # Layer 3: env var overrides
    cfg = _apply_env_overrides(cfg)

    _validate(cfg)
    return cfg


def configure_logging(level: str) -> None:
    """Route resdex diagnostics to stderr through rich.

    stdout is reserved for command output and the stdio protocol.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=False,
    )
    root = logging.getLogger("resdex")
    root.handlers = [handler]
    root.setLevel(level.upper())
