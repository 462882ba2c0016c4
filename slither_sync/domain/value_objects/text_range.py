from typing import NamedTuple


class TextRange(NamedTuple):
    """Zero-based editor range. End column is exclusive."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @property
    def is_empty(self) -> bool:
        return self == NO_RANGE


# Sentinel for "nothing to highlight".
NO_RANGE = TextRange(0, 0, 0, 0)
