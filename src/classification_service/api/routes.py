"""
API routes: classification plus operational endpoints.

POST {API_PREFIX}/classify is the service itself; /health and /version
report on the model lifecycle and configuration.
"""

from datetime import datetime

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from classification_service.api.dependencies import (
    get_backend,
    get_coordinator,
    get_settings,
)
from classification_service.api.models import ErrorResponse, HealthResponse, VersionResponse
from classification_service.config import Settings
from classification_service.inference.backend import BackendState, ZeroShotBackend
from classification_service.models.classification import Classification, ClassifyRequest
from classification_service.pipeline.aggregator import CONFIDENCE_THRESHOLD
from classification_service.pipeline.coordinator import ClassificationCoordinator

logger = structlog.get_logger(__name__)

# Mounted under API_PREFIX
router = APIRouter()

# Mounted at the root
ops_router = APIRouter()


@router.post(
    "/classify",
    response_model=list[Classification],
    status_code=status.HTTP_200_OK,
    summary="Zero-shot multi-label classification",
    description="""
    Score free text against a caller-supplied set of candidate labels.

    Long texts are split into token-bounded chunks; each label keeps its best
    score across chunks and only labels scoring above the confidence
    threshold are returned. An empty array is a valid answer.

    Requests received while the model is still loading wait for it.
    """,
    responses={
        200: {"description": "Labels above the confidence threshold"},
        400: {"model": ErrorResponse, "description": "Invalid request format"},
        500: {"model": ErrorResponse, "description": "Classification failed"},
    },
)
async def classify(
    request: ClassifyRequest,
    coordinator: ClassificationCoordinator = Depends(get_coordinator),
) -> list[Classification]:
    """
    Classify one text against its candidate labels.

    Args:
        request: Text and candidate labels
        coordinator: Shared coordinator (injected)

    Returns:
        Surviving labels with their scores
    """
    logger.info(
        "Classify request received",
        text_chars=len(request.text),
        category_count=len(request.categories),
    )
    return await coordinator.classify(request)


@ops_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="""
    Report the lifecycle of the zero-shot model.

    - healthy: model loaded
    - starting: model not loaded yet (requests will wait for it)
    - unhealthy: model failed to load (requests fail immediately)
    """,
    responses={
        200: {"description": "Model ready or still loading"},
        503: {"description": "Model failed to load"},
    },
)
async def health_check(
    backend: ZeroShotBackend = Depends(get_backend),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    state = backend.state

    if state is BackendState.READY:
        health_status = "healthy"
        status_code = status.HTTP_200_OK
    elif state is BackendState.FAILED:
        health_status = "unhealthy"
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        health_status = "starting"
        status_code = status.HTTP_200_OK

    response = HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        services={"model": state.value},
        timestamp=datetime.utcnow(),
    )

    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
    )


@ops_router.get(
    "/version",
    response_model=VersionResponse,
    summary="Get service and model configuration",
)
async def get_version(
    settings: Settings = Depends(get_settings),
) -> VersionResponse:
    return VersionResponse(
        service_version=settings.APP_VERSION,
        model_name=settings.MODEL_NAME,
        max_chunk_tokens=settings.MAX_CHUNK_TOKENS,
        confidence_threshold=CONFIDENCE_THRESHOLD,
    )
