from slither_sync.domain.entities.detector import Detector
from slither_sync.domain.entities.finding import Finding, FindingElement, SourceMapping

__all__ = [
    "Detector",
    "Finding",
    "FindingElement",
    "SourceMapping",
]
