"""Source drift detection for stored findings.

Each mapped element keeps an MD5 digest of the exact byte slice it pointed
at when the analysis ran. Re-hashing the current file contents and comparing
tells whether the finding's location can still be trusted.
"""

from __future__ import annotations

import hashlib
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import aiofiles
from loguru import logger

from slither_sync.domain.value_objects import SyncState

if TYPE_CHECKING:
    from slither_sync.domain.entities import Finding, SourceMapping


def normalize_path(path: str | Path) -> str:
    """Comparable form of a path: absolute, normalized, case-folded where the OS is."""
    return os.path.normcase(os.path.normpath(os.path.abspath(path)))


def resolve_mapping_path(workspace_root: Path, mapping: SourceMapping) -> Path:
    """Absolute file a mapping refers to, anchored at the workspace root."""
    if mapping.filename_relative:
        return workspace_root / mapping.filename_relative
    return Path(mapping.filename_absolute)


def hash_source_slice(content: bytes, start: int, length: int) -> str:
    return hashlib.md5(content[start : start + length], usedforsecurity=False).hexdigest()


@dataclass
class ValidationReport:
    checked: int = 0
    in_sync: int = 0
    out_of_sync: int = 0
    skipped: int = 0


class _SourceCache:
    """File contents read during one capture or validate pass."""

    def __init__(self) -> None:
        self._contents: dict[str, bytes | None] = {}

    async def read(self, path: Path) -> bytes | None:
        key = normalize_path(path)
        if key not in self._contents:
            try:
                async with aiofiles.open(path, mode="rb") as f:
                    self._contents[key] = await f.read()
            except (OSError, ValueError) as e:
                # ValueError covers paths the OS cannot represent, e.g. embedded NUL.
                logger.warning("Cannot read mapped source {}: {}", path, e)
                self._contents[key] = None
        return self._contents[key]


class SyncValidator:
    async def capture_hashes(
        self,
        workspace_root: Path,
        findings: Sequence[Finding],
        only_missing: bool = False,
    ) -> int:
        """Record the current source digest on every mapped element.

        With ``only_missing`` existing digests are kept and only absent ones
        are filled in. Elements whose file cannot be read are left without a
        digest. Returns the number of digests written.
        """
        cache = _SourceCache()
        captured = 0

        for finding in findings:
            for _, mapping in finding.mapped_elements():
                if only_missing and mapping.source_hash is not None:
                    continue
                content = await cache.read(resolve_mapping_path(workspace_root, mapping))
                if content is None:
                    continue
                mapping.source_hash = hash_source_slice(content, mapping.start, mapping.length)
                captured += 1

        logger.debug("Captured {} source hashes under {}", captured, workspace_root)
        return captured

    async def validate(
        self,
        workspace_root: Path,
        findings: Sequence[Finding],
        changed_file: str | Path | None = None,
    ) -> ValidationReport:
        """Update ``in_sync`` on findings by re-hashing their mapped sources.

        When ``changed_file`` is given only findings with an element mapped to
        that file are re-checked; all others keep their previous state.
        Findings without mapped elements are always in sync.
        """
        cache = _SourceCache()
        report = ValidationReport()
        target = normalize_path(changed_file) if changed_file is not None else None

        for finding in findings:
            mapped = [
                (mapping, resolve_mapping_path(workspace_root, mapping))
                for _, mapping in finding.mapped_elements()
            ]

            # Nothing mapped means nothing can drift, whichever file changed.
            if target is not None and mapped and not any(
                normalize_path(p) == target for _, p in mapped
            ):
                report.skipped += 1
                continue

            finding.in_sync = await self._check(mapped, cache)
            report.checked += 1
            if finding.in_sync == SyncState.IN_SYNC:
                report.in_sync += 1
            else:
                report.out_of_sync += 1

        logger.debug(
            "Validated findings under {}: {} checked, {} out of sync, {} skipped",
            workspace_root,
            report.checked,
            report.out_of_sync,
            report.skipped,
        )
        return report

    async def _check(
        self,
        mapped: list[tuple[SourceMapping, Path]],
        cache: _SourceCache,
    ) -> SyncState:
        for mapping, path in mapped:
            content = await cache.read(path)
            if content is None or mapping.source_hash is None:
                return SyncState.OUT_OF_SYNC
            if hash_source_slice(content, mapping.start, mapping.length) != mapping.source_hash:
                return SyncState.OUT_OF_SYNC
        return SyncState.IN_SYNC
