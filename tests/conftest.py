"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
The fake pipeline mimics the transformers zero-shot-classification pipeline
closely enough for the backend: same call signature, same output shape, and
a ``tokenizer`` attribute with ``encode``.
"""

import threading
from typing import Callable, Optional

import pytest

from classification_service.config import Settings
from classification_service.inference.backend import ZeroShotBackend
from classification_service.models.classification import ClassifyRequest
from classification_service.pipeline.coordinator import ClassificationCoordinator


class WhitespaceTokenizer:
    """One token per whitespace-separated word."""

    def encode(self, text: str, add_special_tokens: bool = True) -> list[str]:
        tokens = text.split()
        if add_special_tokens:
            return ["[CLS]", *tokens, "[SEP]"]
        return tokens


def keyword_scorer(chunk: str, label: str) -> float:
    """0.9 when the label appears in the chunk, 0.1 otherwise."""
    return 0.9 if label.lower() in chunk.lower() else 0.1


class FakeZeroShotPipeline:
    """Stand-in for transformers' zero-shot-classification pipeline."""

    def __init__(self, scorer: Optional[Callable[[str, str], float]] = None):
        self.tokenizer = WhitespaceTokenizer()
        self.scorer = scorer or keyword_scorer
        self.calls: list[tuple[str, list[str]]] = []
        self._calls_lock = threading.Lock()

    def __call__(self, sequences, candidate_labels, hypothesis_template="This example is {}.", multi_label=False):
        assert multi_label, "zero-shot calls must be multi-label"
        with self._calls_lock:
            self.calls.append((sequences, list(candidate_labels)))

        scored = [(label, self.scorer(sequences, label)) for label in candidate_labels]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return {
            "sequence": sequences,
            "labels": [label for label, _ in scored],
            "scores": [score for _, score in scored],
        }


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing."""
    return Settings(
        APP_NAME="Zero-Shot Classification Service (Test)",
        APP_VERSION="0.1.0",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        MODEL_NAME="fake-model",
        MAX_CHUNK_TOKENS=512,
        PRELOAD_MODEL=False,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def fake_pipeline() -> FakeZeroShotPipeline:
    """Fake pipeline with the keyword scorer."""
    return FakeZeroShotPipeline()


@pytest.fixture
def create_pipeline():
    """Factory fixture for a fake pipeline with a custom scorer.

    Usage:
        def test_something(create_pipeline):
            pipeline = create_pipeline(lambda chunk, label: 0.8)
    """
    return FakeZeroShotPipeline


@pytest.fixture
def create_backend():
    """Factory fixture for a backend around a fake (or failing) loader.

    Usage:
        def test_something(create_backend, fake_pipeline):
            backend = create_backend(lambda: fake_pipeline)
    """
    def _create(loader: Callable, **kwargs) -> ZeroShotBackend:
        return ZeroShotBackend(model_name="fake-model", loader=loader, **kwargs)

    return _create


@pytest.fixture
def ready_backend(create_backend, fake_pipeline) -> ZeroShotBackend:
    """Backend whose fake model has finished loading."""
    backend = create_backend(lambda: fake_pipeline)
    backend.wait_until_ready(timeout=5)
    return backend


@pytest.fixture
def coordinator(ready_backend) -> ClassificationCoordinator:
    """Coordinator over the ready fake backend, default 512-token chunks."""
    return ClassificationCoordinator(ready_backend, max_chunk_tokens=512)


@pytest.fixture
def news_article() -> str:
    """Short news article about a university reacting to a geopolitical controversy."""
    return """
Some of Harvard University's most prominent political alumni are criticizing the school for not condemning a student-led statement that blamed Israel for the surprise Hamas attack over the weekend.

"The silence from Harvard's leadership, so far, coupled with a vocal and widely reported student groups' statement blaming Israel solely, has allowed Harvard to appear at best neutral towards acts of terror against the Jewish state of Israel," Lawrence Summers, a former Harvard president and longtime Washington economic policy hand, wrote on X, the platform formerly known as Twitter.

Following much of the backlash, Harvard's leadership released a statement Monday night that did not directly address the student organizations but instead focused on the school's commitment to fostering open dialogue.

"We have no illusion that Harvard alone can readily bridge the widely different views of the Israeli-Palestinian conflict, but we are hopeful that, as a community devoted to learning, we can take steps that will draw on our common humanity and shared values in order to modulate rather than amplify the deep-seated divisions and animosities so distressingly evident in the wider world," the school's leadership said.

A review of the statement shows that most of the 35 student organizations signing the letter are identity-based groups or caucuses. Activist student groups that support Palestinians are common across the country, and they often lead demonstrations and protests critical of Israel on campuses.

The development could represent an early challenge for Claudine Gay, who recently became Harvard's president this summer. The university has often been the target of conservative criticism that higher education panders to elites and teaches liberal viewpoints, and it was the main target of the Supreme Court case that toppled affirmative action in June.
"""


@pytest.fixture
def policy_categories() -> list[str]:
    """Candidate policy-area labels."""
    return [
        "Agriculture",
        "Cannabis",
        "Cybersecurity",
        "Defense",
        "Education",
        "Energy",
        "Environment",
        "Finance",
        "Tax",
        "Health Care",
        "Immigration",
        "Labor",
        "Sustainability",
        "Technology",
        "Trade",
        "Transportation",
    ]


@pytest.fixture
def create_request():
    """Factory fixture for ClassifyRequest."""
    def _create(text: str = "Test text", categories: Optional[list[str]] = None) -> ClassifyRequest:
        return ClassifyRequest(text=text, categories=categories if categories is not None else ["Test"])

    return _create
