"""
FastAPI exception handlers for structured error responses.

Every failure inside the classification core reaches the client as the
same 500 response; the log line keeps the failure kind for diagnosis.
"""

import structlog
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from classification_service.api.models import ErrorResponse
from classification_service.inference.exceptions import ClassificationError

logger = structlog.get_logger(__name__)


async def classification_error_handler(request: Request, exc: ClassificationError) -> JSONResponse:
    """
    Handle failures raised by the classification core.

    Maps to 500 Internal Server Error whatever the kind (initialization,
    runtime, unavailable).

    Args:
        request: FastAPI request
        exc: ClassificationError instance

    Returns:
        JSON error response
    """
    logger.error(
        "Classification error",
        kind=exc.kind,
        error_type=type(exc).__name__,
        message=exc.message,
        details=exc.details,
    )

    body = ErrorResponse(
        error="classification_failed",
        message="Unable to classify the request",
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json", exclude_none=True),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed request bodies (missing fields, wrong JSON types).

    Maps to 400 Bad Request (client error).
    """
    logger.warning("Invalid request format", errors=exc.errors())

    body = ErrorResponse(
        error="invalid_request",
        message="Request validation failed",
        details=jsonable_encoder(exc.errors()),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json"),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)

    body = ErrorResponse(
        error="internal_error",
        message="An unexpected error occurred",
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json", exclude_none=True),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    ClassificationError: classification_error_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
