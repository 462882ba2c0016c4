import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from slither_sync.application.use_cases import AnalysisOutcome, AnalyzeWorkspace
from slither_sync.cli.commands._common import build_store, resolve_workspace
from slither_sync.cli.theme import theme
from slither_sync.domain.services import report_lines
from slither_sync.infrastructure.analyzer import SlitherRunner
from slither_sync.infrastructure.config import WorkspaceConfigStore

console = Console()


def analyze(
    workspaces: list[Path] | None = typer.Argument(
        None, help="Workspace roots to analyze (default: current directory)"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print the summary"),
) -> None:
    """Run slither on each workspace and store the findings."""
    roots = [resolve_workspace(w) for w in workspaces] if workspaces else [resolve_workspace(None)]
    outcomes = asyncio.run(_analyze(roots, quiet))
    if outcomes is None or not all(o.ok for o in outcomes):
        raise typer.Exit(1)


async def _analyze(roots: list[Path], quiet: bool) -> list[AnalysisOutcome] | None:
    runner = SlitherRunner()
    if not await runner.check_version():
        console.print(
            f"[{theme.ERROR_BOLD}]Slither is missing or too old.[/] "
            f"[{theme.DIM}]pip install slither-analyzer --upgrade[/]"
        )
        return None

    console.print(f"[{theme.INFO}]Starting slither analysis...[/]")
    config_store = WorkspaceConfigStore()
    outcomes: list[AnalysisOutcome] = []

    for root in roots:
        config = config_store.load(root)
        store = build_store(config)
        outcome = await AnalyzeWorkspace(runner, store, config_store).execute(root)
        outcomes.append(outcome)

        if not outcome.ok:
            console.print(
                f"[{theme.ERROR_BOLD}]Error in workspace {root}:[/] {escape(outcome.error or '')}"
            )
            continue

        if not quiet:
            for finding in store.visible(root, config.hidden_detectors):
                for line in report_lines(finding):
                    console.print(line, markup=False, highlight=False)
                console.print()

    succeeded = sum(1 for o in outcomes if o.ok)
    failed = len(outcomes) - succeeded
    console.print(
        f"Analysis: [{theme.SUCCESS}]{succeeded} succeeded[/], "
        f"[{theme.ERROR if failed else theme.DIM}]{failed} failed[/]"
    )
    return outcomes
