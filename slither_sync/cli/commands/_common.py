"""Helpers shared by CLI commands."""

from pathlib import Path

from slither_sync.application.finding_store import FindingStore
from slither_sync.domain.entities import Finding
from slither_sync.domain.services import RangeResolver
from slither_sync.domain.value_objects import SyncState
from slither_sync.infrastructure.config import WorkspaceConfig
from slither_sync.infrastructure.persistence import JsonFindingRepo


def build_store(config: WorkspaceConfig) -> FindingStore:
    return FindingStore(JsonFindingRepo(), resolver=RangeResolver(config.collapse_policy))


def resolve_workspace(workspace: Path | None) -> Path:
    return (workspace or Path.cwd()).resolve()


def sync_label(state: SyncState) -> str:
    return {
        SyncState.IN_SYNC: "in sync",
        SyncState.OUT_OF_SYNC: "modified",
        SyncState.UNKNOWN: "unchecked",
    }[state]


def location_label(finding: Finding) -> str:
    """``file:line`` of the first mapped element, or ``-``."""
    mapped = finding.mapped_elements()
    if not mapped:
        return "-"
    _, mapping = mapped[0]
    name = mapping.filename_relative or mapping.filename_absolute
    if mapping.lines:
        return f"{name}:{mapping.lines[0]}"
    return name
