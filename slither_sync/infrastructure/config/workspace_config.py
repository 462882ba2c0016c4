"""Per-workspace settings stored in ``.slither/config.json``."""

import json
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from slither_sync.domain.value_objects import CollapsePolicy
from slither_sync.infrastructure.persistence._paths import StoragePaths


class WorkspaceConfig(BaseModel):
    # Empty means let the analyzer pick its own solc.
    solc_path: str = ""
    # Checks whose findings are hidden from listings and diagnostics.
    hidden_detectors: list[str] = Field(default_factory=list)
    collapse_policy: CollapsePolicy = CollapsePolicy.ALWAYS
    analyzer_timeout_s: int = Field(default=600, gt=0)


class WorkspaceConfigStore:
    def load(self, workspace_root: Path) -> WorkspaceConfig:
        """Load a workspace's config; defaults if missing or invalid."""
        path = StoragePaths(workspace_root).config_path
        if not path.exists():
            return WorkspaceConfig()

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            return WorkspaceConfig.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring invalid config {}: {}", path, e)
            return WorkspaceConfig()

    def save(self, workspace_root: Path, config: WorkspaceConfig) -> Path:
        path = StoragePaths(workspace_root).config_path
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(mode="json"), f, indent="\t")

        logger.info("Saved workspace config to {}", path)
        return path
