"""
Integration tests against the real zero-shot model.

Downloads and runs the configured Hugging Face model, so they only run
when RUN_MODEL_TESTS=1 and transformers is installed:

    RUN_MODEL_TESTS=1 pytest -m model
"""

import os

import pytest

from classification_service.config import settings
from classification_service.inference.backend import ZeroShotBackend
from classification_service.models.classification import ClassifyRequest
from classification_service.pipeline.coordinator import ClassificationCoordinator

pytestmark = pytest.mark.model


@pytest.fixture(scope="module")
def real_backend():
    """Real backend with the configured model, loaded once for the module.

    Skips tests if model tests are not enabled or transformers is missing.
    """
    if os.getenv("RUN_MODEL_TESTS") != "1":
        pytest.skip("Model tests disabled (set RUN_MODEL_TESTS=1)")
    pytest.importorskip("transformers")

    backend = ZeroShotBackend(model_name=settings.MODEL_NAME, device=settings.MODEL_DEVICE)
    backend.start_loading()
    backend.wait_until_ready(timeout=600)
    return backend


@pytest.fixture
def real_coordinator(real_backend) -> ClassificationCoordinator:
    return ClassificationCoordinator(real_backend, max_chunk_tokens=512)


def test_news_article_is_education(real_coordinator, news_article, policy_categories):
    """A university controversy article is about Education and nothing else."""
    result = real_coordinator.classify_sync(
        ClassifyRequest(text=news_article, categories=policy_categories)
    )

    assert len(result) == 1
    assert result[0].label == "Education"
    assert result[0].score > 0.75


def test_empty_text(real_coordinator):
    assert real_coordinator.classify_sync(ClassifyRequest(text="", categories=["A", "B"])) == []


def test_no_categories(real_coordinator, news_article):
    assert real_coordinator.classify_sync(ClassifyRequest(text=news_article, categories=[])) == []


def test_chunks_fit_model_tokenizer(real_backend, news_article):
    """Every chunk of a long text stays within 512 tokens of the real tokenizer."""
    from classification_service.pipeline.segmenter import normalize_text, segment

    text = normalize_text(news_article * 5)
    chunks = list(segment(text, 512, real_backend.count_tokens))

    assert len(chunks) > 1
    assert all(real_backend.count_tokens(chunk) <= 512 for chunk in chunks)
    assert " ".join(chunks) == text
