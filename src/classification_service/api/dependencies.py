"""
FastAPI dependency injection for the classification service.

The zero-shot backend is an expensive, process-wide resource: it is built
once here and shared by every request through the coordinator.
"""

from functools import lru_cache

from classification_service.config import Settings, settings
from classification_service.inference.backend import ZeroShotBackend
from classification_service.pipeline.coordinator import ClassificationCoordinator


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_backend() -> ZeroShotBackend:
    """
    Get the singleton zero-shot backend.

    The model is not loaded here; loading starts from the startup hook
    (or from the first request when preloading is disabled).

    Returns:
        ZeroShotBackend instance
    """
    settings = get_settings()
    return ZeroShotBackend(
        model_name=settings.MODEL_NAME,
        device=settings.MODEL_DEVICE,
        hypothesis_template=settings.HYPOTHESIS_TEMPLATE,
        load_timeout=settings.MODEL_LOAD_TIMEOUT,
        acquire_timeout=settings.BACKEND_ACQUIRE_TIMEOUT,
    )


@lru_cache()
def get_coordinator() -> ClassificationCoordinator:
    """
    Get the singleton coordinator bound to the shared backend.

    Returns:
        ClassificationCoordinator instance
    """
    return ClassificationCoordinator(
        backend=get_backend(),
        max_chunk_tokens=get_settings().MAX_CHUNK_TOKENS,
    )
