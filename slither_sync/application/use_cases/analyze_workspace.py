from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from slither_sync.application.finding_store import FindingStore
from slither_sync.domain.ports import AnalyzerPort
from slither_sync.infrastructure.config import WorkspaceConfigStore
from slither_sync.infrastructure.persistence import StoragePaths


class AnalysisOutcome(BaseModel):
    workspace_root: Path
    ok: bool
    finding_count: int = 0
    error: str | None = None
    duration_ms: int = 0


class AnalyzeWorkspace:
    """Run the analyzer on one workspace root and ingest its findings."""

    def __init__(
        self,
        analyzer: AnalyzerPort,
        store: FindingStore,
        config_store: WorkspaceConfigStore | None = None,
    ) -> None:
        self.analyzer = analyzer
        self.store = store
        self.config_store = config_store or WorkspaceConfigStore()

    async def execute(self, workspace_root: Path) -> AnalysisOutcome:
        config = self.config_store.load(workspace_root)
        output_path = StoragePaths(workspace_root).analyzer_output_path

        result = await self.analyzer.analyze(
            workspace_root,
            output_path,
            solc_path=config.solc_path or None,
            timeout_s=config.analyzer_timeout_s,
        )
        if not result.ok:
            logger.error("Analysis failed for {}: {}", workspace_root, result.error)
            return AnalysisOutcome(
                workspace_root=workspace_root,
                ok=False,
                error=result.error,
                duration_ms=result.duration_ms,
            )

        findings = await self.store.replace_all(workspace_root, result.findings)
        return AnalysisOutcome(
            workspace_root=workspace_root,
            ok=True,
            finding_count=len(findings),
            duration_ms=result.duration_ms,
        )

    async def execute_all(self, workspace_roots: list[Path]) -> list[AnalysisOutcome]:
        """Analyze several roots one after another."""
        outcomes = [await self.execute(root) for root in workspace_roots]
        succeeded = sum(1 for o in outcomes if o.ok)
        logger.info(
            "Analysis: {} succeeded, {} failed", succeeded, len(outcomes) - succeeded
        )
        return outcomes
