from typing import Any


def extract_detector_results(document: Any) -> list[dict[str, Any]]:
    """Detector results from an analyzer JSON document.

    Accepts either a bare array of findings or the analyzer's envelope
    ``{"success": ..., "error": ..., "results": {"detectors": [...]}}``.
    Raises ValueError for any other shape.
    """
    if isinstance(document, list):
        return document

    if isinstance(document, dict):
        results = document.get("results") or {}
        if not isinstance(results, dict):
            raise ValueError("'results' is not an object")
        detectors = results.get("detectors") or []
        if not isinstance(detectors, list):
            raise ValueError("'results.detectors' is not an array")
        return detectors

    raise ValueError(f"unexpected document type: {type(document).__name__}")


def envelope_error(document: Any) -> str | None:
    """Error reported inside an envelope that declares ``success: false``."""
    if isinstance(document, dict) and document.get("success") is False:
        return str(document.get("error") or "analyzer reported failure")
    return None
