from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from slither_sync.domain.entities import Finding
from slither_sync.domain.ports import FindingRepoPort, FindingsFileCorruptError
from slither_sync.infrastructure.analyzer.slither_output import extract_detector_results
from slither_sync.infrastructure.persistence._paths import StoragePaths
from slither_sync.infrastructure.persistence.async_file_lock import async_file_lock
from slither_sync.infrastructure.persistence.atomic_io import atomic_write, read_text


class JsonFindingRepo(FindingRepoPort):
    """Findings stored as ``<root>/.slither/analysis-results.json``.

    The document is a tab-indented JSON array so it diffs cleanly.
    """

    async def load(self, workspace_root: Path) -> list[Finding] | None:
        paths = StoragePaths(workspace_root)
        if not paths.results_path.exists():
            logger.debug("No persisted findings at {}", paths.results_path)
            return None

        try:
            async with async_file_lock(paths.lock_path):
                content = await read_text(paths.results_path)
            if content is None:
                return None
            items = extract_detector_results(json.loads(content))
            return [Finding.from_dict(item) for item in items]
        except (OSError, ValueError, ValidationError) as e:
            # UnicodeDecodeError and JSONDecodeError are ValueErrors.
            raise FindingsFileCorruptError(f"{paths.results_path}: {e}") from e

    async def save(self, workspace_root: Path, findings: list[Finding]) -> None:
        paths = StoragePaths(workspace_root)
        document = json.dumps([f.to_dict() for f in findings], indent="\t")

        async with async_file_lock(paths.lock_path):
            await atomic_write(paths.results_path, document)
        logger.debug("Saved {} findings to {}", len(findings), paths.results_path)

    async def delete(self, workspace_root: Path) -> None:
        paths = StoragePaths(workspace_root)
        if not paths.results_path.exists():
            return

        async with async_file_lock(paths.lock_path):
            paths.results_path.unlink(missing_ok=True)
        logger.debug("Deleted {}", paths.results_path)
