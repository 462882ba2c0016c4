from __future__ import annotations

from typing import TYPE_CHECKING

from slither_sync.domain.value_objects import NO_RANGE, CollapsePolicy, TextRange

if TYPE_CHECKING:
    from slither_sync.domain.entities import Finding, FindingElement

DECLARATION_TYPES = frozenset({"contract", "function"})


class RangeResolver:
    """Turns an element's 1-based line/column mapping into a zero-based range.

    With the display policy applied, multi-line ranges are shortened to
    ``(start_line, start_column, start_line + 1, 0)`` so that selecting a
    finding jumps to the start of the flagged construct instead of selecting
    the whole block. ``CollapsePolicy.DECLARATIONS`` restricts this to
    contract and function elements.
    """

    def __init__(self, collapse_policy: CollapsePolicy = CollapsePolicy.ALWAYS) -> None:
        self.collapse_policy = collapse_policy

    def resolve(
        self,
        finding: Finding,
        element_index: int = 0,
        apply_display_policy: bool = True,
    ) -> TextRange:
        if not 0 <= element_index < len(finding.elements):
            return NO_RANGE

        element = finding.elements[element_index]
        mapping = element.source_mapping
        if mapping is None or not mapping.lines:
            return NO_RANGE

        start_line = max(mapping.lines[0] - 1, 0)
        start_column = max(mapping.starting_column - 1, 0)
        end_line = max(mapping.lines[-1] - 1, 0)
        end_column = max(mapping.ending_column - 1, 0)

        if apply_display_policy and end_line != start_line and self._collapses(element):
            end_line = start_line + 1
            end_column = 0

        return TextRange(start_line, start_column, end_line, end_column)

    def _collapses(self, element: FindingElement) -> bool:
        if self.collapse_policy == CollapsePolicy.DECLARATIONS:
            return element.element_type in DECLARATION_TYPES
        return True
