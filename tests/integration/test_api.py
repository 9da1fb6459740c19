"""
Integration tests for ccql API endpoints.
"""

import pytest
from fastapi.testclient import TestClient


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_returns_200(self, client: TestClient):
        """Health endpoint should return 200 with status info."""
        response = client.get("/api/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "test"
        assert data["default_threshold"] == 0.8
        assert data["default_metric"] == "osa"
        assert "version" in data
        assert "timestamp" in data

    def test_liveness_returns_alive(self, client: TestClient):
        """Liveness probe should return alive status."""
        response = client.get("/api/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_readiness_runs_similarity_check(self, client: TestClient):
        """Readiness probe exercises the similarity engine."""
        response = client.get("/api/health/ready")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["osa"]["status"] == "ready"
        assert data["checks"]["levenshtein"]["status"] == "ready"


class TestSecurityHeaders:
    """Tests for security headers."""

    def test_security_headers_present(self, client: TestClient):
        """Security headers should be present in responses."""
        response = client.get("/api/health")

        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert response.headers["Cache-Control"] == "no-store"
        # Not production
        assert "Strict-Transport-Security" not in response.headers

    def test_request_id_header(self, client: TestClient):
        """Response should include X-Request-ID header."""
        response = client.get("/api/health")
        assert "X-Request-ID" in response.headers
        assert response.headers["X-Response-Time"].endswith("ms")

    def test_request_id_is_echoed(self, client: TestClient):
        response = client.get("/api/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"


class TestDuplicatesEndpoint:
    """Tests for POST /api/duplicates."""

    def test_default_report(self, client: TestClient, typo_prompts):
        """Default min_count hides clusters seen once."""
        response = client.post("/api/duplicates", json={"prompts": typo_prompts})
        assert response.status_code == 200

        data = response.json()
        assert data["total_prompts"] == 6
        assert data["total_clusters"] == 3
        assert data["statistics"]["max_count"] == 4
        assert len(data["clusters"]) == 1

        cluster = data["clusters"][0]
        assert cluster["canonical"] == "continue"
        assert cluster["count"] == 4
        assert cluster["variants"] == []
        assert cluster["latest"] is None

    def test_show_variants_and_min_count(self, client: TestClient, typo_prompts):
        response = client.post("/api/duplicates", json={
            "prompts": typo_prompts,
            "min_count": 1,
            "show_variants": True,
        })
        assert response.status_code == 200

        clusters = response.json()["clusters"]
        assert [c["canonical"] for c in clusters] == ["continue", "fix it", "fix this"]
        assert clusters[0]["variants"] == ["continue", "cotninue", "contnue"]

    def test_metric_option(self, client: TestClient, typo_prompts):
        response = client.post("/api/duplicates", json={
            "prompts": typo_prompts,
            "metric": "levenshtein",
            "show_variants": True,
        })
        assert response.status_code == 200
        assert response.json()["clusters"][0]["variants"] == ["continue", "contnue"]

    def test_empty_prompts(self, client: TestClient):
        response = client.post("/api/duplicates", json={"prompts": []})
        assert response.status_code == 200

        data = response.json()
        assert data["total_prompts"] == 0
        assert data["clusters"] == []

    @pytest.mark.parametrize("payload", [
        {"prompts": ["continue"], "threshold": 1.5},
        {"prompts": ["continue"], "threshold": -0.1},
        {"prompts": ["continue"], "min_count": -1},
        {"prompts": ["continue"], "strategy": "random"},
        {"prompts": ["continue"], "metric": "jaro"},
        {"threshold": 0.8},
    ])
    def test_invalid_request_rejected(self, client: TestClient, payload):
        response = client.post("/api/duplicates", json=payload)
        assert response.status_code == 422


class TestSimilarityEndpoint:
    """Tests for POST /api/similarity."""

    def test_transposed_typo_with_osa(self, client: TestClient):
        response = client.post("/api/similarity", json={"a": "Continue", "b": "cotninue"})
        assert response.status_code == 200

        data = response.json()
        assert data["similarity"] == pytest.approx(0.875)
        assert data["length_ratio"] == 1.0
        assert data["is_similar"] is True

    def test_transposed_typo_with_levenshtein(self, client: TestClient):
        response = client.post("/api/similarity", json={
            "a": "continue", "b": "cotninue", "metric": "levenshtein",
        })
        assert response.status_code == 200

        data = response.json()
        assert data["similarity"] == pytest.approx(0.75)
        assert data["is_similar"] is False

    def test_without_normalization(self, client: TestClient):
        response = client.post("/api/similarity", json={
            "a": "CONTINUE", "b": "continue", "normalize": False,
        })
        assert response.json()["is_similar"] is False

    def test_invalid_threshold(self, client: TestClient):
        response = client.post("/api/similarity", json={"a": "x", "b": "y", "threshold": 2})
        assert response.status_code == 422
