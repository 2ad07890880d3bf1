"""
API route tests (/chat, /v1/analyze, /v1/quota, /v1/health)
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from feelink.adapters.quota.memory import InMemoryQuotaStore
from feelink.api import dependencies
from feelink.api.main import create_app
from feelink.core.config import reload_settings
from feelink.core.exceptions import StorageError
from feelink.domain.services.activity import ActivityResolver
from feelink.domain.services.analysis import EmotionAnalyzer, SessionRecorder
from feelink.domain.services.gateway import RemoteClassifierGateway
from feelink.domain.services.sentiment import SentimentScorer


class ZeroScorer(SentimentScorer):
    def score(self, text: str) -> float:
        return 0.0


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep data files in tmp_path and reset singletons around each test"""
    monkeypatch.setenv("FEELINK_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("ENABLE_HF", raising=False)
    monkeypatch.delenv("ACTIVITIES_TABLE", raising=False)
    reload_settings()
    dependencies.reset_dependencies()
    yield
    dependencies.reset_dependencies()
    monkeypatch.undo()
    reload_settings()


@pytest.fixture
def client():
    analyzer = EmotionAnalyzer(
        gateway=RemoteClassifierGateway(classifier=None, quota_store=InMemoryQuotaStore()),
        resolver=ActivityResolver(),
        recorder=SessionRecorder(None),
        scorer=ZeroScorer(),
    )
    dependencies.set_analyzer(analyzer)
    return TestClient(create_app())


class TestAnalyzeEndpoint:

    def test_chat_happy_text(self, client):
        response = client.post("/chat", json={"text": "I am so happy and excited today"})

        assert response.status_code == 200
        data = response.json()
        assert data["emotion"] == "happy"
        assert data["confidence"] == pytest.approx(0.70)
        assert data["activity"]
        assert data["encouragement"]
        assert data["details"]["analysisMethod"] == "ensemble-only"
        assert data["details"]["detectedLanguage"] == "en"
        assert data["details"]["activitiesSource"] == "fallback"

    def test_v1_alias(self, client):
        response = client.post("/v1/analyze", json={"text": "ฉันกังวลมาก", "userId": "u1"})

        assert response.status_code == 200
        data = response.json()
        assert data["emotion"] == "anxious"
        assert data["details"]["detectedLanguage"] == "th"

    @pytest.mark.parametrize("body", [{"text": ""}, {"text": "   "}, {}])
    def test_blank_text_is_400(self, client, body):
        response = client.post("/chat", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "No text provided"}

    def test_blank_text_never_reaches_engine(self, client):
        mock_analyze = AsyncMock()
        dependencies.get_analyzer().analyze = mock_analyze

        client.post("/chat", json={"text": " "})

        mock_analyze.assert_not_called()

    def test_unexpected_error_is_500(self, client):
        dependencies.get_analyzer().analyze = AsyncMock(side_effect=RuntimeError("boom"))

        response = client.post("/chat", json={"text": "hello"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_cors_preflight(self, client):
        response = client.options(
            "/chat",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_request_id_is_echoed(self, client):
        response = client.post("/chat", json={"text": "hello"}, headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    def test_request_id_is_generated(self, client):
        response = client.post("/chat", json={"text": "hello"})
        assert len(response.headers["X-Request-ID"]) == 12


class TestQuotaEndpoint:

    def test_reports_current_month(self, client):
        response = client.get("/v1/quota")

        assert response.status_code == 200
        data = response.json()
        assert data["used"] == 0
        assert data["limit"] == 500
        assert data["enabled"] is False
        assert data["key"].startswith("feelink:hf_quota:")

    def test_store_error_is_503(self, client):
        store = InMemoryQuotaStore()
        store.get = AsyncMock(side_effect=StorageError("redis down"))
        dependencies.set_quota_store(store)

        response = client.get("/v1/quota")

        assert response.status_code == 503
        assert response.json() == {"error": "redis down"}


class TestSystemEndpoints:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["service"].startswith("Feelink")

    def test_health(self, client):
        response = client.get("/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert set(data["components"]) == {"quota_store", "activity_store", "session_store"}


class TestLifespan:

    def test_shutdown_without_requests_builds_nothing(self, tmp_path, monkeypatch):
        data_dir = tmp_path / "unused"
        monkeypatch.setenv("FEELINK_DATA_DIR", str(data_dir))
        reload_settings()

        with TestClient(create_app()):
            pass

        assert not data_dir.exists()

    def test_shutdown_closes_built_quota_store(self):
        store = InMemoryQuotaStore()
        store.close = AsyncMock()
        dependencies.set_quota_store(store)

        with TestClient(create_app()):
            pass

        store.close.assert_awaited_once()

    def test_shutdown_drains_session_writes(self, client):
        analyzer = dependencies.get_analyzer()
        analyzer.recorder.drain = AsyncMock()

        with client:
            client.post("/chat", json={"text": "hello"})

        analyzer.recorder.drain.assert_awaited_once()
