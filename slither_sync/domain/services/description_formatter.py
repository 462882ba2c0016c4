"""Text helpers for rendering finding descriptions."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slither_sync.domain.entities import Finding

# Matches location references such as " (contracts/Token.sol#12-15)".
_LOCATION_REFERENCE = re.compile(r"\s?\(\S*\.sol(?:#\d+-\d+|#\d+)?\)", re.IGNORECASE)

MULTILINE_MARKER = " [...]"


def sanitize_description(description: str) -> str:
    """Remove embedded file references and normalize line endings."""
    return _LOCATION_REFERENCE.sub("", description).replace("\r\n", "\n")


def summarize(finding: Finding) -> str:
    """Single-line summary suitable for an inline annotation."""
    lines = sanitize_description(finding.description).strip().split("\n")
    summary = lines[0]
    if summary.endswith(":"):
        summary = summary[:-1]
    if len(lines) > 1:
        summary += MULTILINE_MARKER
    return summary


def report_lines(finding: Finding) -> list[str]:
    """Console rendering of a finding.

    The first non-empty line is the headline; later lines are kept only when
    they are list items (leading ``-``) and become bullets.
    """
    output: list[str] = []
    text = finding.description.replace("#", ":").replace("\t", "")

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        if not output:
            output.append(f"❌ {line}")
        elif line.startswith("-"):
            output.append(f"\t•{line[1:]}")

    return output
