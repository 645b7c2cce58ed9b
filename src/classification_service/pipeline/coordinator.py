"""
Request coordinator: segment, score each chunk, aggregate.

Each request is an independent unit of work. The only shared state is the
backend, whose own lock serializes model calls across requests.
"""

import asyncio
import time
from typing import Optional

import structlog

from classification_service.config import settings
from classification_service.inference.backend import ZeroShotBackend
from classification_service.inference.exceptions import (
    ClassificationError,
    InferenceRuntimeError,
)
from classification_service.models.classification import (
    Classification,
    ClassifyRequest,
    LabelScore,
)
from classification_service.monitoring.metrics import (
    classify_chunks_per_request,
    classify_duration_seconds,
    classify_requests_total,
    labels_returned_total,
)
from classification_service.pipeline.aggregator import aggregate
from classification_service.pipeline.segmenter import normalize_text, segment

logger = structlog.get_logger(__name__)


class ClassificationCoordinator:
    """
    Drives one request through the segmenter, the backend and the aggregator.

    The work itself is blocking (waiting for the model, taking its lock,
    running inference), so ``classify`` hands it to a worker thread and only
    the awaiting request is suspended.
    """

    def __init__(self, backend: ZeroShotBackend, max_chunk_tokens: Optional[int] = None):
        self.backend = backend
        if max_chunk_tokens is None:
            max_chunk_tokens = settings.MAX_CHUNK_TOKENS
        self.max_chunk_tokens = max_chunk_tokens

    async def classify(self, request: ClassifyRequest) -> list[Classification]:
        """Classify a request without blocking the event loop."""
        return await asyncio.to_thread(self.classify_sync, request)

    def classify_sync(self, request: ClassifyRequest) -> list[Classification]:
        """
        Classify a request on the calling thread.

        Args:
            request: Text and candidate labels

        Returns:
            Labels scoring above the confidence threshold, one entry each

        Raises:
            ClassificationError: Any backend failure, tagged with its kind
        """
        start_time = time.perf_counter()

        # Duplicates would only cost extra inference; order is kept
        labels = list(dict.fromkeys(request.categories))
        text = normalize_text(request.text)

        if not labels or not text:
            logger.info(
                "Classification skipped",
                reason="no categories" if not labels else "empty text",
            )
            classify_requests_total.labels(status="success").inc()
            classify_chunks_per_request.observe(0)
            return []

        try:
            self.backend.wait_until_ready()

            per_chunk_results: list[list[LabelScore]] = []
            try:
                for chunk in segment(text, self.max_chunk_tokens, self.backend.count_tokens):
                    per_chunk_results.append(self.backend.classify_chunk(chunk, labels))
            except ValueError as exc:
                # Only the segmenter raises ValueError; backend failures are typed
                raise InferenceRuntimeError(
                    f"Text could not be segmented: {exc}",
                    details={"max_chunk_tokens": self.max_chunk_tokens},
                ) from exc
        except ClassificationError as exc:
            classify_requests_total.labels(status=exc.kind).inc()
            logger.error(
                "Classification failed",
                kind=exc.kind,
                error=exc.message,
                details=exc.details,
            )
            raise

        classifications = aggregate(per_chunk_results)

        duration = time.perf_counter() - start_time
        classify_requests_total.labels(status="success").inc()
        classify_duration_seconds.observe(duration)
        classify_chunks_per_request.observe(len(per_chunk_results))
        for classification in classifications:
            labels_returned_total.labels(label=classification.label).inc()

        logger.info(
            "Classification completed",
            text_chars=len(text),
            category_count=len(labels),
            chunk_count=len(per_chunk_results),
            label_count=len(classifications),
            duration_ms=round(duration * 1000, 2),
        )

        return classifications
