from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

TOKEN_SOURCE = (
    "pragma solidity ^0.8.0;\n"
    "\n"
    "contract Token {\n"
    "    uint256 public total;\n"
    "\n"
    "    function mint(uint256 amount) external {\n"
    "        total += amount;\n"
    "    }\n"
    "}\n"
)

TOKEN_PATH = "contracts/Token.sol"

FUNCTION_SNIPPET = "function mint(uint256 amount) external {\n        total += amount;\n    }"
STATEMENT_SNIPPET = "total += amount;"
STATE_VAR_SNIPPET = "uint256 public total;"

FindingFactory = Callable[..., dict[str, Any]]


def source_mapping_for(
    source: str, snippet: str, filename_relative: str, root: Path
) -> dict[str, Any]:
    """Build a source mapping the way the analyzer reports it (1-based lines and columns)."""
    start = source.index(snippet)
    end = start + len(snippet)
    first_line = source.count("\n", 0, start) + 1
    last_line = first_line + snippet.count("\n")
    first_line_offset = source.rfind("\n", 0, start) + 1
    last_line_offset = source.rfind("\n", 0, end) + 1

    return {
        "start": start,
        "length": len(snippet),
        "filename_relative": filename_relative,
        "filename_absolute": str(root / filename_relative),
        "filename_short": filename_relative,
        "is_dependency": False,
        "lines": list(range(first_line, last_line + 1)),
        "starting_column": start - first_line_offset + 1,
        "ending_column": end - last_line_offset + 1,
    }


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    source = root / TOKEN_PATH
    source.parent.mkdir(parents=True)
    source.write_text(TOKEN_SOURCE, encoding="utf-8")
    return root


@pytest.fixture
def make_finding(workspace: Path) -> FindingFactory:
    def factory(
        check: str = "reentrancy-eth",
        snippet: str = FUNCTION_SNIPPET,
        element_type: str = "function",
        name: str = "mint",
        impact: str = "High",
        confidence: str = "Medium",
        description: str | None = None,
        filename_relative: str = TOKEN_PATH,
    ) -> dict[str, Any]:
        return {
            "check": check,
            "impact": impact,
            "confidence": confidence,
            "description": description
            or f"Token.{name}() ({filename_relative}#6-8) is flagged by {check}\n",
            "elements": [
                {
                    "type": element_type,
                    "name": name,
                    "source_mapping": source_mapping_for(
                        TOKEN_SOURCE, snippet, filename_relative, workspace
                    ),
                }
            ],
            "first_markdown_element": f"{filename_relative}#L6-L8",
            "id": f"{check}-{name}",
        }

    return factory
