import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from slither_sync.cli.theme import theme
from slither_sync.infrastructure.analyzer import SlitherRunner

console = Console()


def list_detectors(
    impact: str | None = typer.Option(None, "--impact", "-i", help="Filter by impact"),
) -> None:
    """List the detectors reported by the installed slither."""
    asyncio.run(_list_detectors(impact))


async def _list_detectors(impact: str | None) -> None:
    runner = SlitherRunner()
    try:
        detectors = await runner.list_detectors()
    except (OSError, RuntimeError, ValueError) as e:
        console.print(f"[{theme.ERROR_BOLD}]Cannot list detectors:[/] {escape(str(e))}")
        raise typer.Exit(1) from e

    if impact:
        detectors = [d for d in detectors if d.impact.lower() == impact.lower()]

    if not detectors:
        console.print(f"[{theme.DIM}]No detectors found[/]")
        return

    table = Table(title="Slither detectors")
    table.add_column("Check", style=theme.TABLE_ID)
    table.add_column("Impact")
    table.add_column("Confidence", style=theme.TABLE_SECONDARY)
    table.add_column("Title")

    for d in detectors:
        table.add_row(
            d.check,
            f"[{theme.impact_style(d.impact)}]{d.impact}[/]",
            d.confidence,
            escape(d.title),
        )

    console.print(table)
