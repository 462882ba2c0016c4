from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel

from slither_sync.domain.value_objects import (
    DiagnosticSeverity,
    SyncState,
    TextRange,
    severity_for_impact,
)

if TYPE_CHECKING:
    from slither_sync.domain.entities import Finding
    from slither_sync.domain.services.range_resolver import RangeResolver


class Diagnostic(BaseModel, frozen=True):
    path: Path
    range: TextRange
    message: str
    severity: DiagnosticSeverity
    check: str


def build_diagnostics(
    workspace_root: Path,
    findings: Sequence[Finding],
    resolver: RangeResolver,
    hidden_checks: Iterable[str] = (),
) -> dict[Path, list[Diagnostic]]:
    """Group findings into per-file diagnostics.

    Out-of-sync findings and hidden checks are skipped. Each finding is
    attached to the file of its first element that has a source mapping.
    """
    hidden = set(hidden_checks)
    by_file: dict[Path, list[Diagnostic]] = {}

    for finding in findings:
        if finding.in_sync == SyncState.OUT_OF_SYNC or finding.check in hidden:
            continue

        mapped = finding.mapped_elements()
        if not mapped:
            continue
        index, mapping = mapped[0]

        path = workspace_root / (mapping.filename_relative or mapping.filename_absolute)
        diagnostic = Diagnostic(
            path=path,
            range=resolver.resolve(finding, index, apply_display_policy=False),
            message=finding.description.strip(),
            severity=severity_for_impact(finding.impact),
            check=finding.check,
        )
        by_file.setdefault(path, []).append(diagnostic)

    return by_file
