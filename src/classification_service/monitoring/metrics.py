"""Custom Prometheus metrics for the classification service.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- classify_requests_total (error rate)
- model_state (model stuck in loading or failed)
- backend_inference_seconds (queueing behind the single model lock)
"""

from prometheus_client import Counter, Gauge, Histogram

# === Request Metrics ===

classify_requests_total = Counter(
    "classify_requests_total",
    "Total classification requests by outcome",
    ["status"],
)
"""
Classification requests by outcome.

Labels:
- status: success, initialization, runtime, unavailable
"""

classify_duration_seconds = Histogram(
    "classify_duration_seconds",
    "End-to-end classification duration in seconds",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
)

classify_chunks_per_request = Histogram(
    "classify_chunks_per_request",
    "Number of token-bounded chunks per request",
    buckets=[0, 1, 2, 4, 8, 16, 32, 64],
)

labels_returned_total = Counter(
    "labels_returned_total",
    "Labels returned above the confidence threshold",
    ["label"],
)
"""
Returned label counter.

Labels are caller-supplied, so cardinality follows the label sets clients
actually send. Used to spot drift in what the model reports.
"""

# === Backend Metrics ===

backend_inference_seconds = Histogram(
    "backend_inference_seconds",
    "Duration of a single chunk inference call in seconds (lock held)",
    ["success"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
)

model_load_seconds = Gauge(
    "model_load_seconds",
    "Time taken to load the zero-shot model",
)

model_state = Gauge(
    "model_state",
    "1 for the current backend lifecycle state, 0 for the others",
    ["state"],
)
"""
Backend lifecycle gauge.

Labels:
- state: uninitialized, loading, ready, failed

Alert thresholds:
- CRITICAL: model_state{state="failed"} == 1
- WARN: model_state{state="loading"} == 1 for more than 10 minutes
"""
