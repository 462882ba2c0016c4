import sys
from pathlib import Path

import typer
from loguru import logger

from slither_sync.cli.commands import analyze, detectors, findings


def get_log_dir() -> Path:
    return Path.home() / ".slither-sync" / "logs"


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> Path:
    """Configure loguru logging. Returns the log file path."""
    logger.remove()

    file_path = log_file or get_log_dir() / "slither-sync.log"
    file_path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        file_path,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
        rotation="10 MB",
        encoding="utf-8",
    )

    if verbose:
        logger.add(
            sys.stderr,
            format="{time:HH:mm:ss} | {level: <8} | {message}",
            level="DEBUG",
        )

    return file_path


app = typer.Typer(
    name="slither-sync",
    help="Slither findings store with source drift detection",
    no_args_is_help=True,
)

app.command(name="analyze")(analyze.analyze)
app.command(name="detectors")(detectors.list_detectors)

findings_app = typer.Typer(help="Stored findings commands")
findings_app.command(name="list")(findings.list_findings)
findings_app.command(name="show")(findings.show_finding)
findings_app.command(name="validate")(findings.validate_findings)
findings_app.command(name="goto")(findings.goto_finding)
findings_app.command(name="diagnostics")(findings.diagnostics)
findings_app.command(name="clear")(findings.clear_findings)
app.add_typer(findings_app, name="findings")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output", is_eager=True),
    log_file: Path | None = typer.Option(None, "--log-file", help="Log file path"),
) -> None:
    """Slither findings store with source drift detection."""
    setup_logging(verbose=verbose, log_file=log_file)


if __name__ == "__main__":
    app()
