from pathlib import Path

STORAGE_DIR_NAME = ".slither"
RESULTS_FILE_NAME = "analysis-results.json"
ANALYZER_OUTPUT_FILE_NAME = "analyzer-output.json"
CONFIG_FILE_NAME = "config.json"


class StoragePaths:
    """Files kept under ``<workspace root>/.slither``."""

    def __init__(self, workspace_root: Path) -> None:
        self.workspace_root = workspace_root

    @property
    def storage_dir(self) -> Path:
        return self.workspace_root / STORAGE_DIR_NAME

    @property
    def results_path(self) -> Path:
        return self.storage_dir / RESULTS_FILE_NAME

    @property
    def analyzer_output_path(self) -> Path:
        return self.storage_dir / ANALYZER_OUTPUT_FILE_NAME

    @property
    def config_path(self) -> Path:
        return self.storage_dir / CONFIG_FILE_NAME

    @property
    def lock_path(self) -> Path:
        return self.storage_dir / ".lock"
