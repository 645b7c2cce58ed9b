"""
Zero-shot inference backend.

Owns the single Hugging Face zero-shot-classification pipeline of the
process. Loading takes seconds, so it happens once on a background thread
while the server already accepts connections; callers block until the
model is ready and then take turns on it, one chunk call at a time.
"""

import logging
import threading
import time
from enum import Enum
from functools import partial
from typing import Any, Callable, Optional, Sequence

import structlog

from classification_service.inference.exceptions import (
    BackendUnavailableError,
    InferenceRuntimeError,
    ModelInitializationError,
)
from classification_service.models.classification import LabelScore
from classification_service.monitoring.metrics import (
    backend_inference_seconds,
    model_load_seconds,
    model_state,
)

logger = structlog.get_logger(__name__)

DEFAULT_HYPOTHESIS_TEMPLATE = "This example is {}."


class BackendState(str, Enum):
    """Lifecycle of the shared model. Moves forward only, once per process."""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


def load_zero_shot_pipeline(model_name: str, device: int = -1) -> Any:
    """
    Load a transformers zero-shot-classification pipeline.

    transformers (and torch) are imported here rather than at module scope
    so that importing the service stays cheap. Their own stderr handler is
    dropped so their records go through the structlog-formatted root handler.

    Args:
        model_name: Hugging Face model ID (e.g. ``facebook/bart-large-mnli``)
        device: -1 for CPU, otherwise the CUDA device index

    Returns:
        The pipeline; its ``tokenizer`` attribute is used for chunking
    """
    # configure_logging picks the level; transformers resets it on first import
    library_level = logging.getLogger("transformers").getEffectiveLevel()

    from transformers import pipeline as hf_pipeline
    from transformers.utils import logging as hf_logging

    hf_logging.disable_default_handler()
    hf_logging.enable_propagation()
    hf_logging.set_verbosity(library_level)

    return hf_pipeline("zero-shot-classification", model=model_name, device=device)


class ZeroShotBackend:
    """
    Process-wide zero-shot model with lazy background loading.

    Two primitives guard it:
    - ``_settled`` (Event) is set once loading ends, successfully or not;
      every caller waits on it instead of polling.
    - ``_model_lock`` (Lock) is held for exactly one pipeline call or one
      token count (the tokenizer is part of the pipeline), so
      concurrent requests interleave chunk by chunk.

    A load failure is final: the backend stays FAILED and every caller gets
    ModelInitializationError. A failing call only fails its own request.
    """

    def __init__(
        self,
        model_name: str,
        device: int = -1,
        hypothesis_template: str = DEFAULT_HYPOTHESIS_TEMPLATE,
        load_timeout: Optional[float] = None,
        acquire_timeout: Optional[float] = None,
        loader: Optional[Callable[[], Any]] = None,
    ):
        """
        Create an unloaded backend.

        Args:
            model_name: Hugging Face model ID
            device: -1 for CPU, otherwise the CUDA device index
            hypothesis_template: NLI hypothesis, ``{}`` is replaced by each label
            load_timeout: Max seconds to wait for the model, None waits forever
            acquire_timeout: Max seconds to wait for the model lock, None waits forever
            loader: Zero-argument callable returning the pipeline; defaults to
                load_zero_shot_pipeline(model_name, device)
        """
        self.model_name = model_name
        self.device = device
        self.hypothesis_template = hypothesis_template
        self.load_timeout = load_timeout
        self.acquire_timeout = acquire_timeout
        self.loader = loader or partial(load_zero_shot_pipeline, model_name, device)

        self._pipeline: Any = None
        self._load_error: Optional[BaseException] = None
        self._loader_thread: Optional[threading.Thread] = None

        self._state = BackendState.UNINITIALIZED
        self._state_lock = threading.Lock()
        self._settled = threading.Event()
        self._model_lock = threading.Lock()

        self._publish_state()

    @property
    def state(self) -> BackendState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is BackendState.READY

    def start_loading(self) -> None:
        """Start loading on a background thread. Later calls do nothing."""
        with self._state_lock:
            if self._state is not BackendState.UNINITIALIZED:
                return
            self._state = BackendState.LOADING
            self._loader_thread = threading.Thread(
                target=self._load,
                name="zero-shot-model-loader",
                daemon=True,
            )
            self._loader_thread.start()

        self._publish_state()
        logger.info("Model loading started", model=self.model_name, device=self.device)

    def _load(self) -> None:
        start_time = time.perf_counter()
        try:
            pipeline = self.loader()
        except Exception as exc:
            with self._state_lock:
                self._load_error = exc
                self._state = BackendState.FAILED
            logger.error(
                "Model loading failed",
                model=self.model_name,
                error_type=type(exc).__name__,
                exc_info=exc,
            )
        else:
            duration = time.perf_counter() - start_time
            with self._state_lock:
                self._pipeline = pipeline
                self._state = BackendState.READY
            model_load_seconds.set(duration)
            logger.info(
                "Model ready",
                model=self.model_name,
                load_duration_s=round(duration, 2),
            )
        finally:
            self._publish_state()
            self._settled.set()

    def wait_until_ready(self, timeout: Optional[float] = None) -> None:
        """
        Block the calling thread until the model is loaded.

        Starts loading if nobody has yet.

        Args:
            timeout: Seconds to wait; defaults to the backend's load_timeout

        Raises:
            ModelInitializationError: Loading failed
            BackendUnavailableError: Timeout elapsed while still loading
        """
        self.start_loading()

        if timeout is None:
            timeout = self.load_timeout

        if not self._settled.wait(timeout):
            raise BackendUnavailableError(
                "Timed out waiting for the model to load",
                details={"model": self.model_name, "timeout_s": timeout},
            )

        if self._state is BackendState.FAILED:
            raise ModelInitializationError(
                f"Model {self.model_name} failed to load",
                details={
                    "model": self.model_name,
                    "error_type": type(self._load_error).__name__,
                    "error": str(self._load_error),
                },
            ) from self._load_error

    def count_tokens(self, text: str) -> int:
        """
        Number of tokens the model's tokenizer produces for text (no special tokens).

        The tokenizer belongs to the pipeline, so counting takes the same
        exclusive lock as a model call.

        Raises:
            ModelInitializationError: Model failed to load
            BackendUnavailableError: Load or lock wait timed out
            InferenceRuntimeError: The tokenizer itself failed
        """
        self.wait_until_ready()
        self._acquire_model()
        try:
            return len(self._pipeline.tokenizer.encode(text, add_special_tokens=False))
        except Exception as exc:
            logger.error(
                "Token counting failed",
                model=self.model_name,
                text_chars=len(text),
                error_type=type(exc).__name__,
                exc_info=exc,
            )
            raise InferenceRuntimeError(
                f"Token counting failed: {exc}",
                details={"model": self.model_name, "error_type": type(exc).__name__},
            ) from exc
        finally:
            self._model_lock.release()

    def classify_chunk(self, chunk: str, labels: Sequence[str]) -> list[LabelScore]:
        """
        Score every label against one chunk, independently (multi-label).

        Args:
            chunk: Text within the model's token budget
            labels: Candidate labels

        Returns:
            One LabelScore per label; scores do not sum to 1

        Raises:
            ModelInitializationError: Model failed to load
            BackendUnavailableError: Load or lock wait timed out
            InferenceRuntimeError: The model call itself failed
        """
        if not labels:
            return []

        self.wait_until_ready()
        self._acquire_model()

        start_time = time.perf_counter()
        try:
            result = self._pipeline(
                chunk,
                candidate_labels=list(labels),
                hypothesis_template=self.hypothesis_template,
                multi_label=True,
            )
            scores = [
                LabelScore(label=label, score=float(score))
                for label, score in zip(result["labels"], result["scores"])
            ]
        except Exception as exc:
            backend_inference_seconds.labels(success="false").observe(
                time.perf_counter() - start_time
            )
            logger.error(
                "Inference failed",
                model=self.model_name,
                chunk_chars=len(chunk),
                label_count=len(labels),
                error_type=type(exc).__name__,
                exc_info=exc,
            )
            raise InferenceRuntimeError(
                f"Inference failed: {exc}",
                details={"model": self.model_name, "error_type": type(exc).__name__},
            ) from exc
        finally:
            self._model_lock.release()

        backend_inference_seconds.labels(success="true").observe(
            time.perf_counter() - start_time
        )

        return scores

    def _acquire_model(self) -> None:
        acquire_timeout = -1 if self.acquire_timeout is None else self.acquire_timeout
        if not self._model_lock.acquire(timeout=acquire_timeout):
            raise BackendUnavailableError(
                "Timed out waiting for exclusive use of the model",
                details={"model": self.model_name, "timeout_s": self.acquire_timeout},
            )

    def _publish_state(self) -> None:
        for state in BackendState:
            model_state.labels(state=state.value).set(1 if state is self._state else 0)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"model={self.model_name}, "
            f"state={self._state.value})"
        )
