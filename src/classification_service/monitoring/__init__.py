"""Monitoring and metrics instrumentation for the classification service.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from classification_service.monitoring.metrics import (
    backend_inference_seconds,
    classify_chunks_per_request,
    classify_duration_seconds,
    classify_requests_total,
    labels_returned_total,
    model_load_seconds,
    model_state,
)

__all__ = [
    "classify_requests_total",
    "classify_duration_seconds",
    "classify_chunks_per_request",
    "labels_returned_total",
    "backend_inference_seconds",
    "model_load_seconds",
    "model_state",
]
