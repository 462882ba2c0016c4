from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slither_sync.domain.entities import Finding


class FindingsFileCorruptError(Exception):
    """Persisted findings exist but cannot be parsed."""


class FindingRepoPort(ABC):
    """Port for persisting the findings of one workspace root."""

    @abstractmethod
    async def load(self, workspace_root: Path) -> "list[Finding] | None":
        """Load persisted findings; None if nothing was persisted.

        Raises FindingsFileCorruptError if the stored document cannot be read or parsed.
        """

    @abstractmethod
    async def save(self, workspace_root: Path, findings: "list[Finding]") -> None:
        """Persist findings, replacing anything stored before."""

    @abstractmethod
    async def delete(self, workspace_root: Path) -> None:
        """Remove persisted findings, if any."""
