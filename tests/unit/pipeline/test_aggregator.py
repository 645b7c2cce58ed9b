"""Unit tests for cross-chunk label aggregation."""

import random

import pytest

from classification_service.models.classification import LabelScore
from classification_service.pipeline.aggregator import CONFIDENCE_THRESHOLD, aggregate


def scores(*pairs: tuple[str, float]) -> list[LabelScore]:
    return [LabelScore(label=label, score=score) for label, score in pairs]


def as_dict(classifications) -> dict[str, float]:
    return {c.label: c.score for c in classifications}


class TestAggregate:
    """Test threshold and max-score merge."""

    def test_no_chunks(self):
        assert aggregate([]) == []

    def test_nothing_above_threshold(self):
        result = aggregate([scores(("A", 0.1), ("B", 0.5)), scores(("A", 0.7))])
        assert result == []

    def test_threshold_is_exclusive(self):
        """A score of exactly 0.75 is dropped."""
        result = aggregate([scores(("A", CONFIDENCE_THRESHOLD), ("B", 0.7500001))])
        assert as_dict(result) == {"B": 0.7500001}

    def test_keeps_max_score_across_chunks(self):
        result = aggregate([
            scores(("Education", 0.8), ("Defense", 0.2)),
            scores(("Education", 0.95), ("Defense", 0.76)),
            scores(("Education", 0.9)),
        ])
        assert as_dict(result) == {"Education": 0.95, "Defense": 0.76}

    def test_low_score_never_replaces_high(self):
        result = aggregate([scores(("A", 0.9)), scores(("A", 0.1))])
        assert as_dict(result) == {"A": 0.9}

    def test_duplicate_label_within_chunk(self):
        result = aggregate([scores(("A", 0.8), ("A", 0.85))])
        assert as_dict(result) == {"A": 0.85}

    def test_labels_are_case_and_whitespace_sensitive(self):
        result = aggregate([scores(("Tax", 0.9), ("tax", 0.8), ("Tax ", 0.77))])
        assert as_dict(result) == {"Tax": 0.9, "tax": 0.8, "Tax ": 0.77}

    def test_tie_keeps_first_seen(self):
        result = aggregate([scores(("A", 0.8)), scores(("A", 0.8))])
        assert len(result) == 1
        assert result[0].score == 0.8

    def test_accepts_generators(self):
        chunks = (iter(scores(("A", 0.9))) for _ in range(3))
        assert as_dict(aggregate(chunks)) == {"A": 0.9}


class TestAggregateProperties:
    """Randomized checks of the aggregation invariants."""

    LABELS = ["Education", "Defense", "Health Care", "Trade", "education"]

    @pytest.fixture(params=range(20))
    def per_chunk(self, request) -> list[list[LabelScore]]:
        rng = random.Random(request.param)
        return [
            scores(*[(rng.choice(self.LABELS), round(rng.random(), 3)) for _ in range(rng.randint(0, 8))])
            for _ in range(rng.randint(0, 6))
        ]

    def test_threshold(self, per_chunk):
        assert all(c.score > CONFIDENCE_THRESHOLD for c in aggregate(per_chunk))

    def test_uniqueness(self, per_chunk):
        labels = [c.label for c in aggregate(per_chunk)]
        assert len(labels) == len(set(labels))

    def test_max_score(self, per_chunk):
        result = as_dict(aggregate(per_chunk))
        for label in self.LABELS:
            seen = [s.score for chunk in per_chunk for s in chunk if s.label == label]
            if any(score > CONFIDENCE_THRESHOLD for score in seen):
                assert result[label] == max(seen)
            else:
                assert label not in result

    def test_idempotent(self, per_chunk):
        assert as_dict(aggregate(per_chunk)) == as_dict(aggregate(per_chunk))

    def test_order_independent(self, per_chunk):
        assert as_dict(aggregate(per_chunk)) == as_dict(aggregate(list(reversed(per_chunk))))
