from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from slither_sync.domain.entities import Detector


class AnalyzerRunResult(BaseModel):
    """Outcome of one analyzer invocation.

    ``ok`` reflects whether a usable findings document was produced, not the
    process exit code.
    """

    ok: bool
    exit_code: int | None = None
    # Raw finding objects; malformed entries are dropped at ingestion.
    findings: list[Any] = Field(default_factory=list)
    error: str | None = None
    duration_ms: int = 0


class AnalyzerPort(ABC):
    """Port for the external static analyzer."""

    @abstractmethod
    async def version(self) -> str | None:
        """Installed analyzer version, or None if it cannot be run."""

    @abstractmethod
    async def check_version(self) -> bool:
        """True if the installed analyzer meets the minimum version."""

    @abstractmethod
    async def list_detectors(self) -> list[Detector]:
        """Detector catalog reported by the analyzer."""

    @abstractmethod
    async def analyze(
        self,
        workspace_root: Path,
        output_path: Path,
        solc_path: str | None = None,
        timeout_s: int | None = None,
    ) -> AnalyzerRunResult:
        """Analyze a workspace and collect the findings written to output_path."""
