"""Resdex rich error messages: actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from resdex.cli.errors import err_resources_dir_missing
    console.print(err_resources_dir_missing(path))
    raise typer.Exit(1)
"""

from __future__ import annotations


def err_resources_dir_missing(path: str) -> str:
    """Resources root does not exist or is not a directory."""
    return (
        f"[red]Error:[/] Resources directory not found: '{path}'\n"
        "  Create it, or point resdex at an existing one:\n"
        "    resdex list --resources-dir <path>\n"
        "    export RESDEX_RESOURCES_DIR=<path>"
    )


def err_load_failed(message: str) -> str:
    """A parser failed while indexing the resources directory."""
    return (
        f"[red]Error:[/] Could not index resources: {message}\n"
        "  Check file permissions under the resources directory and retry."
    )


def err_config_invalid(message: str) -> str:
    """resdex.yaml or the global config holds an invalid value."""
    return (
        f"[red]Error:[/] Invalid configuration: {message}\n"
        "  Fix the value in resdex.yaml (or ~/.resdex/config.yaml)."
    )


def err_resource_not_found(resource_id: str) -> str:
    """No resource with this exact id."""
    return (
        f"[yellow]Resource not found:[/] '{resource_id}'\n"
        "  Ids are case-sensitive. Run:  resdex list  to see available ids."
    )


def err_no_phrases() -> str:
    """search called without any usable phrase."""
    return (
        "[red]Error:[/] No search phrases given.\n"
        '  Run:  resdex search "testing" "ci pipeline"'
    )
