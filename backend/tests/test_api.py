"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from previewguard.agents.sanitizer import SanitizerAgent
from previewguard.api.deps import get_sanitizer
from previewguard.config import get_settings
from previewguard.main import app

from conftest import VALID_PREVIEW, FakeTransformer, completed

UNNAMED_CODE = VALID_PREVIEW.replace("Preview", "HomePage")


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def script_sanitizer():
    """Install a sanitizer backed by a scripted transformer; returns the transformer."""

    def _install(*responses):
        transformer = FakeTransformer(responses)
        app.dependency_overrides[get_sanitizer] = lambda: SanitizerAgent(
            transformer=transformer, max_attempts=2, instruction="SYSTEM"
        )
        return transformer

    return _install


class TestSanitizeEndpoint:
    def test_success(self, client, script_sanitizer, raw_generated):
        script_sanitizer(completed(f"{VALID_PREVIEW}\n// END OF CODE"))

        response = client.post("/api/v1/previews/sanitize", json={"raw_code": raw_generated})

        assert response.status_code == 200
        body = response.json()
        assert body["code"] == VALID_PREVIEW
        assert body["attempts"] == 1
        assert body["fixes_applied"] == ["llm_sanitization"]
        assert body["line_count"] == VALID_PREVIEW.count("\n") + 1

    def test_failure_contract(self, client, script_sanitizer, raw_generated):
        transformer = script_sanitizer(completed(UNNAMED_CODE), completed(UNNAMED_CODE))

        response = client.post(
            "/api/v1/previews/sanitize",
            json={"raw_code": raw_generated, "client_id": "bakery-42"},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "SANITIZATION_FAILED"
        assert body["reason"] == "validation_failed"
        assert body["attempts"] == 2
        assert len(body["details"]) == 1
        assert "Fresh bread every morning" not in response.text
        assert len(transformer.calls) == 2

    def test_shape_rejection(self, client, script_sanitizer):
        transformer = script_sanitizer()

        response = client.post("/api/v1/previews/sanitize", json={"raw_code": "just some plain text"})

        assert response.status_code == 422
        body = response.json()
        assert body["reason"] == "shape_rejected"
        assert body["attempts"] == 0
        assert transformer.calls == []

    def test_raw_code_too_short(self, client, script_sanitizer):
        script_sanitizer()
        response = client.post("/api/v1/previews/sanitize", json={"raw_code": "short"})
        assert response.status_code == 422
        assert "detail" in response.json()


class TestValidateEndpoint:
    def test_auto_fix(self, client, raw_generated):
        response = client.post("/api/v1/previews/validate", json={"code": raw_generated})

        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["fixes_applied"]
        assert body["code"].startswith("function Preview()")
        assert body["minimal"]["valid"] is True

    def test_validate_only(self, client, raw_generated):
        response = client.post(
            "/api/v1/previews/validate",
            json={"code": raw_generated, "auto_fix": False},
        )

        body = response.json()
        assert body["valid"] is False
        assert body["code"] == raw_generated
        assert body["fixes_applied"] == []
        assert {e["type"] for e in body["errors"]} >= {"import", "export", "directive", "typescript-annotation"}
        assert body["minimal"]["valid"] is False


class TestAdminKey:
    def test_key_required_when_configured(self, client, monkeypatch):
        monkeypatch.setenv("ADMIN_API_KEY", "secret")
        get_settings.cache_clear()

        missing = client.post("/api/v1/previews/validate", json={"code": VALID_PREVIEW})
        wrong = client.post(
            "/api/v1/previews/validate",
            json={"code": VALID_PREVIEW},
            headers={"X-API-KEY": "nope"},
        )
        ok = client.post(
            "/api/v1/previews/validate",
            json={"code": VALID_PREVIEW},
            headers={"X-API-KEY": "secret"},
        )

        assert missing.status_code == 403
        assert wrong.status_code == 403
        assert ok.status_code == 200

    def test_health_is_public(self, client, monkeypatch):
        monkeypatch.setenv("ADMIN_API_KEY", "secret")
        get_settings.cache_clear()
        response = client.get("/api/v1/health")
        assert response.status_code == 200


class TestHealth:
    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["status"] == "healthy"
        assert body["dependencies"]["sanitizer_prompt"]["status"] == "healthy"
        assert body["dependencies"]["llm"]["status"] == "healthy"

    def test_degraded_without_llm_key(self, client, monkeypatch):
        monkeypatch.setenv("LLM_API_KEY", "")
        get_settings.cache_clear()
        body = client.get("/api/v1/health").json()
        assert body["status"] == "degraded"
        assert body["dependencies"]["llm"]["status"] == "degraded"

    def test_root(self, client):
        assert client.get("/").json()["name"] == "PreviewGuard"
