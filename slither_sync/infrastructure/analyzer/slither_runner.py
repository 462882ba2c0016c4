import asyncio
import json
import os
import signal
from datetime import UTC, datetime
from pathlib import Path

from loguru import logger
from packaging.version import InvalidVersion, Version

from slither_sync.domain.entities import Detector
from slither_sync.domain.ports import AnalyzerPort, AnalyzerRunResult
from slither_sync.infrastructure.analyzer.slither_output import (
    envelope_error,
    extract_detector_results,
)

DEFAULT_EXECUTABLE = "slither"
EXECUTABLE_ENV_VAR = "SLITHER_PATH"
MINIMUM_VERSION = "0.4.0"
DEFAULT_TIMEOUT_S = 600
QUERY_TIMEOUT_S = 60


def analyzer_executable() -> str:
    """Analyzer command, overridable through the SLITHER_PATH environment variable."""
    return os.environ.get(EXECUTABLE_ENV_VAR) or DEFAULT_EXECUTABLE


class SlitherRunner(AnalyzerPort):
    """Runs the slither executable as a subprocess."""

    def __init__(
        self,
        executable: str | None = None,
        timeout_s: int = DEFAULT_TIMEOUT_S,
        minimum_version: str = MINIMUM_VERSION,
    ) -> None:
        self.executable = executable or analyzer_executable()
        self.timeout_s = timeout_s
        self.minimum_version = minimum_version

    async def _exec(
        self,
        *args: str,
        cwd: Path | None = None,
        timeout_s: int = QUERY_TIMEOUT_S,
    ) -> tuple[int, str, str]:
        proc = await asyncio.create_subprocess_exec(
            self.executable,
            *args,
            cwd=str(cwd) if cwd else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=True,
        )

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout_s)
        except TimeoutError:
            # Kill the whole process group; solc children outlive the parent otherwise.
            try:
                os.killpg(os.getpgid(proc.pid), signal.SIGKILL)
            except (ProcessLookupError, OSError):
                proc.kill()
            await proc.wait()
            raise

        return (
            proc.returncode or 0,
            stdout.decode(errors="replace"),
            stderr.decode(errors="replace"),
        )

    async def version(self) -> str | None:
        try:
            exit_code, stdout, stderr = await self._exec("--version")
        except (OSError, TimeoutError) as e:
            logger.error("Cannot run {}: {}", self.executable, e)
            return None

        if exit_code != 0:
            logger.error("'{} --version' failed: {}", self.executable, stderr.strip())
            return None
        return stdout.strip()

    async def check_version(self) -> bool:
        installed = await self.version()
        if installed is None:
            logger.error(
                "Slither installation required. Install it with: pip install slither-analyzer"
            )
            return False

        try:
            supported = Version(installed) >= Version(self.minimum_version)
        except InvalidVersion:
            logger.error("Unrecognized slither version string: {!r}", installed)
            return False

        if not supported:
            logger.error(
                "Incompatible slither version {} (minimum {}). "
                "Upgrade with: pip install slither-analyzer --upgrade",
                installed,
                self.minimum_version,
            )
        return supported

    async def list_detectors(self) -> list[Detector]:
        exit_code, stdout, stderr = await self._exec("--list-detectors-json")
        if exit_code != 0 and not stdout.strip():
            raise RuntimeError(f"Failed to list detectors: {stderr.strip()}")

        detectors = [Detector.model_validate(item) for item in json.loads(stdout)]
        return sorted(detectors, key=lambda d: d.check)

    async def analyze(
        self,
        workspace_root: Path,
        output_path: Path,
        solc_path: str | None = None,
        timeout_s: int | None = None,
    ) -> AnalyzerRunResult:
        """Analyze ``workspace_root``, writing JSON results to ``output_path``.

        Slither exits non-zero whenever it reports findings, so success is
        judged by a parseable document at ``output_path`` rather than the
        exit code. Any stale document is removed before the run.
        """
        start = datetime.now(UTC)
        timeout = timeout_s or self.timeout_s

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.unlink(missing_ok=True)

        args = [str(workspace_root), "--disable-solc-warnings", "--json", str(output_path)]
        if solc_path:
            args += ["--solc", solc_path]

        logger.info("Running {} on {}", self.executable, workspace_root)
        try:
            exit_code, _, stderr = await self._exec(*args, cwd=workspace_root, timeout_s=timeout)
        except TimeoutError:
            logger.warning("Analysis of {} timed out after {}s", workspace_root, timeout)
            return AnalyzerRunResult(
                ok=False,
                error=f"Timeout after {timeout}s",
                duration_ms=timeout * 1000,
            )
        except OSError as e:
            logger.error("Cannot run {}: {}", self.executable, e)
            return AnalyzerRunResult(ok=False, error=str(e), duration_ms=_elapsed_ms(start))

        duration_ms = _elapsed_ms(start)

        if not output_path.exists():
            logger.error("Analysis of {} produced no results file", workspace_root)
            return AnalyzerRunResult(
                ok=False,
                exit_code=exit_code,
                error=stderr.strip() or f"exit code {exit_code}",
                duration_ms=duration_ms,
            )

        try:
            document = json.loads(output_path.read_text(encoding="utf-8"))
            failure = envelope_error(document)
            findings = extract_detector_results(document)
        except (OSError, ValueError) as e:
            logger.error("Unreadable analyzer output {}: {}", output_path, e)
            return AnalyzerRunResult(
                ok=False,
                exit_code=exit_code,
                error=f"unreadable output: {e}",
                duration_ms=duration_ms,
            )

        if failure is not None:
            return AnalyzerRunResult(
                ok=False, exit_code=exit_code, error=failure, duration_ms=duration_ms
            )

        logger.info(
            "Analysis of {} finished in {}ms with {} findings",
            workspace_root,
            duration_ms,
            len(findings),
        )
        return AnalyzerRunResult(
            ok=True,
            exit_code=exit_code,
            findings=findings,
            duration_ms=duration_ms,
        )


def _elapsed_ms(start: datetime) -> int:
    return int((datetime.now(UTC) - start).total_seconds() * 1000)
