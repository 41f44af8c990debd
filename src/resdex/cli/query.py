"""resdex query commands.

Commands:
  resdex list [--prefix P]       list resources, sorted and paginated
  resdex search PHRASE...        whole-word phrase search
  resdex get ID [--children]     render one resource's content
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from resdex.cli.context import err_console, load_cli_config, open_registry
from resdex.cli.errors import err_no_phrases, err_resource_not_found
from resdex.query.tools import GetResourceContentTool, ListResourcesTool, SearchResourcesTool

console = Console()

ResourcesDirOpt = Annotated[
    Path | None,
    typer.Option("--resources-dir", "-d", help="Resources root (overrides config)."),
]
LimitOpt = Annotated[int | None, typer.Option("--limit", "-l", help="Page size (default 15).")]
PageOpt = Annotated[int | None, typer.Option("--page", "-p", help="Page number, 1-based.")]
JsonOpt = Annotated[bool, typer.Option("--json", help="Print the raw JSON response.")]


def list_cmd(
    prefix: Annotated[
        str | None,
        typer.Option("--prefix", help="Only ids equal to or beneath this prefix, e.g. 'tests|unit'."),
    ] = None,
    limit: LimitOpt = None,
    page: PageOpt = None,
    as_json: JsonOpt = False,
    resources_dir: ResourcesDirOpt = None,
) -> None:
    """List resources by importance, then id."""
    cfg = load_cli_config(resources_dir)
    registry = open_registry(cfg)
    result = ListResourcesTool(registry, cfg.pagination.default_limit).execute(prefix, limit, page)
    _print_page(result, as_json, title="Resources")


def search_cmd(
    phrases: Annotated[list[str], typer.Argument(help="Phrases matched as whole words.")],
    limit: LimitOpt = None,
    page: PageOpt = None,
    as_json: JsonOpt = False,
    resources_dir: ResourcesDirOpt = None,
) -> None:
    """Search names, descriptions and when-to-load hints."""
    if not any(p.strip() for p in phrases):
        err_console.print(err_no_phrases())
        raise typer.Exit(1)

    cfg = load_cli_config(resources_dir)
    registry = open_registry(cfg)
    result = SearchResourcesTool(registry, cfg.pagination.default_limit).execute(
        phrases, limit, page
    )
    _print_page(result, as_json, title=f"Search: {', '.join(phrases)}")


def get_cmd(
    resource_id: Annotated[str, typer.Argument(metavar="ID", help="Exact resource id.")],
    children: Annotated[
        bool, typer.Option("--children", "-c", help="Append the resource's children.")
    ] = False,
    resources_dir: ResourcesDirOpt = None,
) -> None:
    """Show the full content of one resource."""
    cfg = load_cli_config(resources_dir)
    registry = open_registry(cfg)
    result = GetResourceContentTool(registry).execute(resource_id, show_children=children)

    if result.get("isError"):
        err_console.print(err_resource_not_found(resource_id))
        raise typer.Exit(1)
    typer.echo(result["text"])


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _print_page(result: dict[str, Any], as_json: bool, title: str) -> None:
    if as_json:
        typer.echo(json.dumps(result, indent=2))
        return

    if not result["resources"]:
        console.print(f"[yellow]No resources on page {result['page']}.[/]  (total: {result['total']})")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Id", style="bold", overflow="fold")
    table.add_column("Kind")
    table.add_column("Importance")
    table.add_column("Description", overflow="fold")

    for r in result["resources"]:
        table.add_row(r["id"], r["kind"], r["importance"] or "", r["description"] or "")

    console.print(table)
    console.print(
        f"\n  page {result['page']}/{result['totalPages']}  ·  {result['total']} total"
    )
