"""
Integration tests for the classification service.

- API endpoints (FastAPI TestClient, fake backend injected via dependency overrides)
- Real zero-shot model (marked with @pytest.mark.model, opt-in via RUN_MODEL_TESTS=1)
"""
