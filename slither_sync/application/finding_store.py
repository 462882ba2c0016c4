from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError

from slither_sync.application.sync_validator import (
    SyncValidator,
    ValidationReport,
    normalize_path,
    resolve_mapping_path,
)
from slither_sync.domain.entities import Finding
from slither_sync.domain.ports import FindingRepoPort, FindingsFileCorruptError
from slither_sync.domain.services import FindingDeduplicator, RangeResolver, summarize
from slither_sync.domain.value_objects import SyncState, TextRange


class GotoTarget(BaseModel, frozen=True):
    """Where an editor should open to show a finding."""

    path: Path
    range: TextRange
    element_index: int


class FindingStore:
    """Findings per workspace root, held in memory and mirrored to disk.

    Mutating operations on one root are serialized by a per-root lock;
    different roots are independent. ``get`` never blocks.
    """

    def __init__(
        self,
        repo: FindingRepoPort,
        validator: SyncValidator | None = None,
        deduplicator: FindingDeduplicator | None = None,
        resolver: RangeResolver | None = None,
    ) -> None:
        self._repo = repo
        self._validator = validator or SyncValidator()
        self._deduplicator = deduplicator or FindingDeduplicator()
        self.resolver = resolver or RangeResolver()
        self._findings: dict[str, list[Finding]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock(self, key: str) -> asyncio.Lock:
        return self._locks.setdefault(key, asyncio.Lock())

    async def load(self, workspace_root: str | Path | None) -> bool:
        """Load persisted findings for a root.

        A missing or corrupt findings file yields an empty collection.
        Returns False only when there is no workspace root at all.
        """
        if workspace_root is None:
            logger.warning("No workspace root to load findings for")
            return False

        root = Path(workspace_root)
        key = normalize_path(root)

        async with self._lock(key):
            try:
                findings = await self._repo.load(root)
            except FindingsFileCorruptError as e:
                logger.error("Discarding unreadable findings for {}: {}", root, e)
                findings = None

            findings = findings or []

            # Files written before hashes were recorded get them now.
            if any(m.source_hash is None for f in findings for _, m in f.mapped_elements()):
                captured = await self._validator.capture_hashes(root, findings, only_missing=True)
                if captured:
                    await self._repo.save(root, findings)
                    logger.info("Backfilled {} source hashes for {}", captured, root)

            self._findings[key] = findings
            logger.info("Loaded {} findings for {}", len(findings), root)

        return True

    async def replace_all(
        self,
        workspace_root: str | Path,
        raw_findings: Iterable[Finding | dict[str, Any]],
    ) -> tuple[Finding, ...]:
        """Replace a root's findings with the output of a fresh analysis run."""
        root = Path(workspace_root)
        key = normalize_path(root)

        parsed = self._parse(raw_findings)
        findings = self._deduplicator.deduplicate(parsed)
        duplicates = self._deduplicator.find_duplicates(parsed)
        if duplicates:
            logger.info("Dropped {} duplicate findings for {}", len(duplicates), root)
            for duplicate, _ in duplicates:
                logger.debug("Duplicate '{}' finding: {}", duplicate.check, summarize(duplicate))

        async with self._lock(key):
            await self._validator.capture_hashes(root, findings)
            self._findings[key] = findings
            await self._repo.save(root, findings)
            logger.info("Stored {} findings for {}", len(findings), root)

        return tuple(findings)

    async def clear(self, workspace_root: str | Path) -> None:
        root = Path(workspace_root)
        key = normalize_path(root)
        async with self._lock(key):
            self._findings.pop(key, None)
            await self._repo.delete(root)
            logger.info("Cleared findings for {}", root)

    def get(self, workspace_root: str | Path) -> tuple[Finding, ...]:
        return tuple(self._findings.get(normalize_path(workspace_root), ()))

    def workspaces(self) -> list[str]:
        return list(self._findings)

    def visible(self, workspace_root: str | Path, hidden_checks: Iterable[str]) -> list[Finding]:
        """Findings whose check is not hidden by the workspace configuration."""
        hidden = set(hidden_checks)
        return [f for f in self.get(workspace_root) if f.check not in hidden]

    async def validate(
        self,
        workspace_root: str | Path,
        changed_file: str | Path | None = None,
    ) -> ValidationReport:
        """Re-check drift for a root and persist the updated sync flags."""
        root = Path(workspace_root)
        key = normalize_path(root)

        async with self._lock(key):
            findings = self._findings.get(key)
            if not findings:
                return ValidationReport()

            report = await self._validator.validate(root, findings, changed_file)
            if report.checked:
                await self._repo.save(root, findings)

        if report.out_of_sync:
            logger.info("{} findings out of sync under {}", report.out_of_sync, root)
        return report

    def goto_finding(
        self,
        workspace_root: str | Path,
        finding: Finding,
        element_index: int = 0,
    ) -> GotoTarget | None:
        """Resolve the file and selection for navigating to a finding."""
        if not 0 <= element_index < len(finding.elements):
            logger.error("Cannot navigate to finding '{}': no such element", finding.check)
            return None

        mapping = finding.elements[element_index].mapping
        if mapping is None:
            logger.error("Cannot navigate to finding '{}': no source mapping", finding.check)
            return None

        if finding.in_sync == SyncState.OUT_OF_SYNC:
            logger.error(
                "Cannot navigate to finding '{}': the mapped source has been modified",
                finding.check,
            )
            return None

        return GotoTarget(
            path=resolve_mapping_path(Path(workspace_root), mapping),
            range=self.resolver.resolve(finding, element_index),
            element_index=element_index,
        )

    def _parse(self, raw_findings: Iterable[Finding | dict[str, Any]]) -> list[Finding]:
        parsed: list[Finding] = []
        for position, item in enumerate(raw_findings):
            if isinstance(item, Finding):
                parsed.append(item.model_copy(deep=True))
                continue
            try:
                parsed.append(Finding.from_dict(item))
            except ValidationError as e:
                logger.warning("Skipping malformed finding #{}: {}", position, e)
        return parsed
