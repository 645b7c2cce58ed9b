"""
Merge per-chunk label scores into a single classification result.
"""

from typing import Iterable

from classification_service.models.classification import Classification, LabelScore

# Scores must be strictly greater than this to be reported
CONFIDENCE_THRESHOLD = 0.75


def aggregate(per_chunk_results: Iterable[Iterable[LabelScore]]) -> list[Classification]:
    """
    Fold the label scores of every chunk into one entry per label.

    Entries at or below CONFIDENCE_THRESHOLD are dropped. When a label
    survives more than once, the highest score wins; on an exact tie the
    first one seen is kept.

    Args:
        per_chunk_results: One sequence of LabelScore per chunk

    Returns:
        Classifications in the order their labels were first seen.
        Empty when nothing clears the threshold or there were no chunks.
    """
    best: dict[str, Classification] = {}

    for chunk_scores in per_chunk_results:
        for label_score in chunk_scores:
            if label_score.score <= CONFIDENCE_THRESHOLD:
                continue

            existing = best.get(label_score.label)
            if existing is None or label_score.score > existing.score:
                best[label_score.label] = Classification(
                    label=label_score.label,
                    score=label_score.score,
                )

    return list(best.values())
