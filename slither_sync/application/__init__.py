from slither_sync.application.finding_store import FindingStore, GotoTarget
from slither_sync.application.sync_validator import SyncValidator, ValidationReport

__all__ = ["FindingStore", "GotoTarget", "SyncValidator", "ValidationReport"]
