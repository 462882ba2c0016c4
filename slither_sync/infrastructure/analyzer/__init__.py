from slither_sync.infrastructure.analyzer.slither_output import (
    envelope_error,
    extract_detector_results,
)
from slither_sync.infrastructure.analyzer.slither_runner import SlitherRunner

__all__ = ["SlitherRunner", "envelope_error", "extract_detector_results"]
