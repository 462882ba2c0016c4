from slither_sync.infrastructure.persistence._paths import StoragePaths
from slither_sync.infrastructure.persistence.json_finding_repo import JsonFindingRepo

__all__ = ["JsonFindingRepo", "StoragePaths"]
