"""
FastAPI application entry point for the zero-shot classification service.
"""

from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator

from classification_service.api.dependencies import get_backend
from classification_service.api.error_handlers import EXCEPTION_HANDLERS
from classification_service.api.middleware import RequestTracingMiddleware
from classification_service.api.routes import ops_router, router
from classification_service.config import settings
from classification_service.logging_config import configure_logging

# Configure structured logging before anything logs
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Zero-shot multi-label text classification over arbitrary candidate labels",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, prefix=settings.API_PREFIX, tags=["classification"])
app.include_router(ops_router, tags=["ops"])


@app.on_event("startup")
async def startup():
    """Start loading the model in the background; the server accepts requests meanwhile."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        model=settings.MODEL_NAME,
        max_chunk_tokens=settings.MAX_CHUNK_TOKENS,
    )

    if settings.PRELOAD_MODEL:
        get_backend().start_loading()
    else:
        logger.info("Model preload disabled, loading on first request")

    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown():
    # The loader thread is a daemon and the model is never torn down
    logger.info("Application shutdown", model_state=get_backend().state.value)


# Must be registered before the static mount, which catches every other path
if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)

static_dir = Path(settings.STATIC_DIR)
if static_dir.is_dir():
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
else:
    logger.warning("Static directory not found, front page disabled", path=str(static_dir))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "classification_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
    )
