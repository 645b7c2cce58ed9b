"""
Pydantic data models for the classification service.

Includes:
- ClassifyRequest (inbound text + candidate labels)
- LabelScore (per-chunk model output)
- Classification (merged per-label result)
"""

from classification_service.models.classification import (
    Classification,
    ClassifyRequest,
    LabelScore,
)

__all__ = [
    "ClassifyRequest",
    "LabelScore",
    "Classification",
]
