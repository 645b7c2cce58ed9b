"""
Classification pipeline.

- segmenter.py: whitespace normalization and token-bounded chunking
- aggregator.py: threshold + max-score merge across chunks
- coordinator.py: ClassificationCoordinator driving one request end to end
"""

from classification_service.pipeline.aggregator import CONFIDENCE_THRESHOLD, aggregate
from classification_service.pipeline.coordinator import ClassificationCoordinator
from classification_service.pipeline.segmenter import normalize_text, segment

__all__ = [
    "CONFIDENCE_THRESHOLD",
    "aggregate",
    "ClassificationCoordinator",
    "normalize_text",
    "segment",
]
