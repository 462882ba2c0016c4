from slither_sync.application.use_cases.analyze_workspace import AnalysisOutcome, AnalyzeWorkspace

__all__ = ["AnalysisOutcome", "AnalyzeWorkspace"]
