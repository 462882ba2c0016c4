from enum import Enum


class SyncState(str, Enum):
    """Whether the source a finding maps to still matches what was analyzed."""

    UNKNOWN = "unknown"
    IN_SYNC = "in_sync"
    OUT_OF_SYNC = "out_of_sync"
