"""Domain services."""

from slither_sync.domain.services.description_formatter import (
    report_lines,
    sanitize_description,
    summarize,
)
from slither_sync.domain.services.diagnostics import Diagnostic, build_diagnostics
from slither_sync.domain.services.finding_deduplicator import FindingDeduplicator
from slither_sync.domain.services.range_resolver import RangeResolver

__all__ = [
    "Diagnostic",
    "FindingDeduplicator",
    "RangeResolver",
    "build_diagnostics",
    "report_lines",
    "sanitize_description",
    "summarize",
]
