"""resdex status command.

Shows where resources are read from and what the index holds.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from resdex.cli.context import load_cli_config, open_registry
from resdex.query.tools import is_listable
from resdex.registry.models import ResourceKind

console = Console()


def status_cmd(
    resources_dir: Annotated[
        Path | None,
        typer.Option("--resources-dir", "-d", help="Resources root (overrides config)."),
    ] = None,
) -> None:
    """Show the resources directory and index statistics."""
    cfg = load_cli_config(resources_dir)

    lines = [
        f"Resources: [bold]{cfg.resources_dir}[/]",
        f"Max depth: {cfg.resources.max_depth}",
        f"Page size: {cfg.pagination.default_limit}",
    ]
    console.print(Panel("\n".join(lines), title="[bold]Configuration[/]", expand=False))

    registry = open_registry(cfg)
    resources = registry.get_all()
    by_kind = Counter(r.kind for r in resources)
    hidden = sum(1 for r in resources if not is_listable(r))

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Kind", style="bold")
    table.add_column("Count", justify="right")
    for kind in ResourceKind:
        table.add_row(kind.value, f"{by_kind.get(kind, 0):,}")
    table.add_row("total", f"{len(resources):,}")

    console.print(Panel(table, title="[bold]Index[/]", expand=False))
    if hidden:
        console.print(f"[dim]{hidden} section(s) without metadata are not listed.[/]")
