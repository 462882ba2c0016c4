import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from slither_sync.application.finding_store import FindingStore
from slither_sync.cli.commands._common import (
    build_store,
    location_label,
    resolve_workspace,
    sync_label,
)
from slither_sync.cli.theme import theme
from slither_sync.domain.entities import Finding
from slither_sync.domain.services import build_diagnostics, report_lines, summarize
from slither_sync.domain.value_objects import SyncState
from slither_sync.infrastructure.config import WorkspaceConfig, WorkspaceConfigStore

console = Console()

WORKSPACE_OPTION = typer.Option(None, "--workspace", "-w", help="Workspace root")


async def _open(workspace: Path | None) -> tuple[Path, WorkspaceConfig, FindingStore]:
    root = resolve_workspace(workspace)
    config = WorkspaceConfigStore().load(root)
    store = build_store(config)
    await store.load(root)
    return root, config, store


def _pick(findings: tuple[Finding, ...], index: int) -> Finding:
    if not 1 <= index <= len(findings):
        console.print(f"[{theme.ERROR}]No finding #{index} ({len(findings)} stored)[/]")
        raise typer.Exit(1)
    return findings[index - 1]


def list_findings(
    workspace: Path | None = WORKSPACE_OPTION,
    show_hidden: bool = typer.Option(False, "--all", "-a", help="Include hidden detectors"),
) -> None:
    """List stored findings."""
    asyncio.run(_list(workspace, show_hidden))


async def _list(workspace: Path | None, show_hidden: bool) -> None:
    root, config, store = await _open(workspace)
    findings = store.get(root)
    hidden = set() if show_hidden else set(config.hidden_detectors)

    if not findings:
        console.print(f"[{theme.DIM}]No findings stored for {root}[/]")
        return

    table = Table(title=f"Findings in {root.name}")
    table.add_column("#", style=theme.TABLE_ID)
    table.add_column("Impact")
    table.add_column("Confidence", style=theme.TABLE_SECONDARY)
    table.add_column("Check")
    table.add_column("Location", style=theme.TABLE_SECONDARY)
    table.add_column("Source")
    table.add_column("Summary")

    for number, finding in enumerate(findings, start=1):
        if finding.check in hidden:
            continue
        sync_style = {
            SyncState.IN_SYNC: theme.IN_SYNC,
            SyncState.OUT_OF_SYNC: theme.OUT_OF_SYNC,
        }.get(finding.in_sync, theme.SYNC_UNKNOWN)
        table.add_row(
            str(number),
            f"[{theme.impact_style(finding.impact)}]{finding.impact}[/]",
            finding.confidence,
            finding.check,
            location_label(finding),
            f"[{sync_style}]{sync_label(finding.in_sync)}[/]",
            escape(summarize(finding)),
        )

    console.print(table)


def show_finding(
    index: int = typer.Argument(..., help="Finding number as shown by 'findings list'"),
    workspace: Path | None = WORKSPACE_OPTION,
) -> None:
    """Show one finding with its source elements."""
    asyncio.run(_show(index, workspace))


async def _show(index: int, workspace: Path | None) -> None:
    root, _, store = await _open(workspace)
    finding = _pick(store.get(root), index)

    for line in report_lines(finding):
        console.print(line, markup=False, highlight=False)
    console.print(
        f"[{theme.DIM}]{finding.check} | impact {finding.impact} | "
        f"confidence {finding.confidence} | {sync_label(finding.in_sync)}[/]"
    )

    for i, element in enumerate(finding.elements):
        mapping = element.mapping
        location = "-"
        if mapping is not None:
            r = store.resolver.resolve(finding, i, apply_display_policy=False)
            name = mapping.filename_relative or mapping.filename_absolute
            location = f"{name}:{r.start_line + 1}:{r.start_column + 1}"
        parent = finding.parent_index(i)
        parent_note = f" (in #{parent})" if parent is not None else ""
        console.print(
            f"  [{theme.TABLE_ID}]{i}[/] {element.element_type} {escape(element.name)}{parent_note}"
        )
        console.print(f"    [{theme.DIM}]{location}[/]")


def validate_findings(
    workspace: Path | None = WORKSPACE_OPTION,
    changed_file: Path | None = typer.Option(
        None, "--file", "-f", help="Only re-check findings touching this file"
    ),
) -> None:
    """Check stored findings against the current source files."""
    asyncio.run(_validate(workspace, changed_file))


async def _validate(workspace: Path | None, changed_file: Path | None) -> None:
    root, _, store = await _open(workspace)
    report = await store.validate(root, changed_file)

    console.print(
        f"Checked {report.checked} findings: "
        f"[{theme.SUCCESS}]{report.in_sync} in sync[/], "
        f"[{theme.OUT_OF_SYNC if report.out_of_sync else theme.DIM}]"
        f"{report.out_of_sync} modified[/]"
        + (f" [{theme.DIM}]({report.skipped} skipped)[/]" if report.skipped else "")
    )


def goto_finding(
    index: int = typer.Argument(..., help="Finding number as shown by 'findings list'"),
    element: int = typer.Option(0, "--element", "-e", help="Element index"),
    workspace: Path | None = WORKSPACE_OPTION,
) -> None:
    """Print the file and selection for a finding as path:line:col-line:col."""
    asyncio.run(_goto(index, element, workspace))


async def _goto(index: int, element: int, workspace: Path | None) -> None:
    root, _, store = await _open(workspace)
    finding = _pick(store.get(root), index)

    target = store.goto_finding(root, finding, element)
    if target is None:
        console.print(f"[{theme.ERROR}]Cannot navigate to finding #{index}[/]")
        raise typer.Exit(1)

    r = target.range
    console.print(
        f"{target.path}:{r.start_line + 1}:{r.start_column + 1}"
        f"-{r.end_line + 1}:{r.end_column + 1}",
        markup=False,
        highlight=False,
    )


def diagnostics(workspace: Path | None = WORKSPACE_OPTION) -> None:
    """Print diagnostics grouped by file."""
    asyncio.run(_diagnostics(workspace))


async def _diagnostics(workspace: Path | None) -> None:
    root, config, store = await _open(workspace)
    by_file = build_diagnostics(root, store.get(root), store.resolver, config.hidden_detectors)

    if not by_file:
        console.print(f"[{theme.DIM}]No diagnostics[/]")
        return

    for path, items in sorted(by_file.items()):
        console.print(f"[bold]{path}[/]")
        for d in items:
            console.print(
                f"  {d.range.start_line + 1}:{d.range.start_column + 1} "
                f"[{theme.severity_style(d.severity.value)}]{d.severity.value}[/] "
                f"{d.check}"
            )


def clear_findings(workspace: Path | None = WORKSPACE_OPTION) -> None:
    """Delete stored findings for a workspace."""
    asyncio.run(_clear(workspace))


async def _clear(workspace: Path | None) -> None:
    root, _, store = await _open(workspace)
    await store.clear(root)
    console.print(f"[{theme.SUCCESS}]Cleared findings for {root}[/]")
