"""
Unit tests for the classification service.

Test individual components in isolation against a fake zero-shot pipeline:
- Segmenter (normalization, token budget, coverage)
- Aggregator (threshold, max-score merge, uniqueness)
- Backend (lazy loading, failure states, lock discipline)
- Coordinator (short-circuits, end-to-end flow, async contract)
- API models and dependency singletons
"""
