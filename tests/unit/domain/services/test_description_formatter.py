from slither_sync.domain.entities import Finding
from slither_sync.domain.services import report_lines, sanitize_description, summarize

REENTRANCY = (
    "Reentrancy in Token.withdraw() (contracts/Token.sol#20-26):\n"
    "\tExternal calls:\n"
    "\t- (ok) = msg.sender.call{value: amount}() (contracts/Token.sol#22)\n"
    "\tState variables written after the call(s):\n"
    "\t- balances[msg.sender] = 0 (contracts/Token.sol#24)\n"
)


class TestSanitizeDescription:
    def test_strips_file_references(self) -> None:
        text = "Token.total (contracts/Token.sol#4) is never initialized (lib/Math.sol)"

        assert sanitize_description(text) == "Token.total is never initialized"

    def test_normalizes_line_endings(self) -> None:
        assert sanitize_description("a\r\nb") == "a\nb"

    def test_keeps_non_solidity_parentheses(self) -> None:
        assert sanitize_description("f(uint256) (see docs)") == "f(uint256) (see docs)"


class TestSummarize:
    def test_single_line(self) -> None:
        finding = Finding(description="Token.mint() (contracts/Token.sol#6-8) is unprotected\n")

        assert summarize(finding) == "Token.mint() is unprotected"

    def test_multi_line_is_marked_and_loses_trailing_colon(self) -> None:
        assert summarize(Finding(description=REENTRANCY)) == "Reentrancy in Token.withdraw() [...]"


class TestReportLines:
    def test_headline_and_bullets(self) -> None:
        lines = report_lines(Finding(description=REENTRANCY))

        assert lines == [
            "❌ Reentrancy in Token.withdraw() (contracts/Token.sol:20-26):",
            "\t• (ok) = msg.sender.call{value: amount}() (contracts/Token.sol:22)",
            "\t• balances[msg.sender] = 0 (contracts/Token.sol:24)",
        ]

    def test_leading_blank_lines_are_skipped(self) -> None:
        assert report_lines(Finding(description="\n\n  headline\n")) == ["❌ headline"]

    def test_empty_description(self) -> None:
        assert report_lines(Finding(description="")) == []
