"""
Zero-shot inference backend and its error taxonomy.

- backend.py: ZeroShotBackend (lazy-loaded, lock-guarded transformers pipeline)
- exceptions.py: ClassificationError and its kinds
"""

from classification_service.inference.backend import BackendState, ZeroShotBackend
from classification_service.inference.exceptions import (
    BackendUnavailableError,
    ClassificationError,
    InferenceRuntimeError,
    ModelInitializationError,
)

__all__ = [
    "BackendState",
    "ZeroShotBackend",
    "ClassificationError",
    "ModelInitializationError",
    "InferenceRuntimeError",
    "BackendUnavailableError",
]
