from enum import Enum


class DiagnosticSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"


def severity_for_impact(impact: str) -> DiagnosticSeverity:
    """Map an analyzer impact label to a diagnostic severity."""
    if impact == "High":
        return DiagnosticSeverity.ERROR
    if impact in ("Medium", "Low"):
        return DiagnosticSeverity.WARNING
    return DiagnosticSeverity.INFORMATION
