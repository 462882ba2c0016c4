from __future__ import annotations

import json
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slither_sync.domain.entities import Finding


class FindingDeduplicator:
    def canonical_form(self, finding: Finding) -> str:
        return json.dumps(finding.content_dict(), sort_keys=True, separators=(",", ":"))

    def deduplicate(self, findings: Sequence[Finding]) -> list[Finding]:
        """Drop structural duplicates, keeping first occurrences in order."""
        seen: set[str] = set()
        unique: list[Finding] = []

        for finding in findings:
            key = self.canonical_form(finding)
            if key in seen:
                continue
            seen.add(key)
            unique.append(finding)

        return unique

    def find_duplicates(self, findings: Sequence[Finding]) -> list[tuple[Finding, Finding]]:
        """Return (duplicate, first occurrence) pairs."""
        duplicates: list[tuple[Finding, Finding]] = []
        first_by_key: dict[str, Finding] = {}

        for finding in findings:
            key = self.canonical_form(finding)
            existing = first_by_key.get(key)
            if existing is not None:
                duplicates.append((finding, existing))
            else:
                first_by_key[key] = finding

        return duplicates
