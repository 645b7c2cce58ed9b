"""
Custom exceptions for the inference backend.

Every failure raised by the classification core derives from
ClassificationError and carries a ``kind`` so that the API layer can log
where the failure came from while still answering with a single
server-error response.
"""


class ClassificationError(Exception):
    """
    Base exception for all classification failures.

    Catch this to handle any error raised while classifying a request.
    """
    kind = "classification"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ModelInitializationError(ClassificationError):
    """
    Raised when the zero-shot model or its tokenizer could not be loaded.

    The backend stays in the FAILED state afterwards, so every request
    raises this immediately instead of waiting for a model that will
    never arrive.
    """
    kind = "initialization"


class InferenceRuntimeError(ClassificationError):
    """
    Raised when a single model call fails for one chunk.

    Only the in-flight request fails; the backend remains usable.
    """
    kind = "runtime"


class BackendUnavailableError(ClassificationError):
    """
    Raised when waiting for the model to load, or for exclusive use of it,
    exceeds the configured timeout.
    """
    kind = "unavailable"
