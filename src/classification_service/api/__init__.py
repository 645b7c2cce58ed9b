"""
FastAPI API routes and endpoints.

- routes.py: POST /api/classify, GET /health, GET /version
- dependencies.py: Singleton settings, backend and coordinator
- models.py: API-specific response and error models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request ID tracing
"""

from classification_service.api import dependencies, error_handlers, models
from classification_service.api.routes import ops_router, router

__all__ = [
    "router",
    "ops_router",
    "dependencies",
    "error_handlers",
    "models",
]
