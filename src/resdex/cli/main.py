"""Resdex CLI entry point."""

from __future__ import annotations

from typing import Annotated

import typer

from resdex.cli.query import get_cmd, list_cmd, search_cmd
from resdex.cli.serve import package_version, serve_cmd
from resdex.cli.status import status_cmd


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"resdex {package_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="resdex",
    help=(
        "Resdex: hierarchical index over a documentation tree.\n\n"
        "  resdex list    Browse resources by id prefix.\n"
        "  resdex search  Whole-word search over names and descriptions.\n"
        "  resdex serve   Answer the same queries as JSON-RPC on stdio."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """Resdex: hierarchical index over a documentation tree."""


app.command("list")(list_cmd)
app.command("search")(search_cmd)
app.command("get")(get_cmd)
app.command("status")(status_cmd)
app.command("serve")(serve_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed resdex version."""
    typer.echo(f"resdex {package_version()}")


if __name__ == "__main__":
    app()
