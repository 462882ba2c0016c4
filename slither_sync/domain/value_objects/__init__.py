from slither_sync.domain.value_objects.collapse_policy import CollapsePolicy
from slither_sync.domain.value_objects.severity import DiagnosticSeverity, severity_for_impact
from slither_sync.domain.value_objects.sync_state import SyncState
from slither_sync.domain.value_objects.text_range import NO_RANGE, TextRange

__all__ = [
    "NO_RANGE",
    "CollapsePolicy",
    "DiagnosticSeverity",
    "SyncState",
    "TextRange",
    "severity_for_impact",
]
