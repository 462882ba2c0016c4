from slither_sync.domain.ports.analyzer_port import AnalyzerPort, AnalyzerRunResult
from slither_sync.domain.ports.finding_repo_port import FindingRepoPort, FindingsFileCorruptError

__all__ = [
    "AnalyzerPort",
    "AnalyzerRunResult",
    "FindingRepoPort",
    "FindingsFileCorruptError",
]
