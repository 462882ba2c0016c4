from slither_sync.infrastructure.config.workspace_config import (
    WorkspaceConfig,
    WorkspaceConfigStore,
)

__all__ = ["WorkspaceConfig", "WorkspaceConfigStore"]
