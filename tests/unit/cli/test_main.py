"""Tests for CLI main module."""

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from slither_sync.cli.main import app, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self, tmp_path: Path) -> None:
        """Default logging writes to a file under the log directory."""
        from loguru import logger

        with patch("slither_sync.cli.main.get_log_dir", return_value=tmp_path):
            log_file = setup_logging(verbose=False)

        assert len(logger._core.handlers) == 1
        assert log_file.parent == tmp_path
        assert log_file.suffix == ".log"

    def test_setup_logging_verbose(self, tmp_path: Path) -> None:
        """Verbose logging adds a stderr handler."""
        from loguru import logger

        with patch("slither_sync.cli.main.get_log_dir", return_value=tmp_path):
            setup_logging(verbose=True)

        assert len(logger._core.handlers) == 2

    def test_setup_logging_explicit_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "nested" / "run.log"

        assert setup_logging(log_file=log_file) == log_file
        assert log_file.parent.is_dir()


class TestApp:
    def test_help_lists_commands(self, tmp_path: Path) -> None:
        with patch("slither_sync.cli.main.get_log_dir", return_value=tmp_path):
            result = CliRunner().invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("analyze", "detectors", "findings"):
            assert command in result.output

    def test_findings_list_on_empty_workspace(self, tmp_path: Path) -> None:
        with patch("slither_sync.cli.main.get_log_dir", return_value=tmp_path / "logs"):
            result = CliRunner().invoke(app, ["findings", "list", "--workspace", str(tmp_path)])

        assert result.exit_code == 0
        assert "No findings stored" in result.output

    def test_goto_unknown_finding_fails(self, tmp_path: Path) -> None:
        with patch("slither_sync.cli.main.get_log_dir", return_value=tmp_path / "logs"):
            result = CliRunner().invoke(app, ["findings", "goto", "3", "-w", str(tmp_path)])

        assert result.exit_code == 1
