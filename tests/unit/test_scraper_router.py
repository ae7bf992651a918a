"""
API tests for the /scraper routes.

The lead search service is swapped through FastAPI dependency overrides so
no browser or geocoder is involved.
"""

import pytest
from fastapi.testclient import TestClient

from lead_scraper.api.v1.routes.scraper_router import get_lead_search_service
from lead_scraper.core.exceptions import NavigationError
from lead_scraper.main import app
from lead_scraper.service.lead_search_service import LeadSearchService
from lead_scraper.service.prompt_parser_service import TokenPromptParser
from lead_scraper.service.resource_manager_service import BrowserSessionLimiter
from lead_scraper.service.search_engine_service import ExtractionConfig, SearchResultExtractor


@pytest.fixture
def build_client(fake_place_validator):
    def _build(session_factory):
        service = LeadSearchService(
            parser=TokenPromptParser(place_validator=fake_place_validator),
            extractor=SearchResultExtractor(ExtractionConfig(results_wait_timeout_ms=10)),
            session_factory=session_factory,
            limiter=BrowserSessionLimiter(max_sessions=1),
        )
        app.dependency_overrides[get_lead_search_service] = lambda: service
        return TestClient(app)

    yield _build
    app.dependency_overrides.clear()


class TestPromptDetails:
    def test_returns_discovered_fields(self, build_client, make_session_recorder):
        client = build_client(make_session_recorder())

        response = client.get(
            "/scraper/details",
            params={"search": "Looking for a CEO from Mumbai in the finance industry"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "industry": "finance industry",
            "position": "CEO",
            "place": "Mumbai",
        }
        assert response.headers["X-Trace-ID"]

    def test_partial_result_omits_missing_fields(self, build_client, make_session_recorder):
        client = build_client(make_session_recorder())

        response = client.get("/scraper/details", params={"search": "any cto?"})

        assert response.status_code == 200
        assert response.json() == {"position": "CTO"}

    def test_missing_search_is_rejected(self, build_client, make_session_recorder):
        client = build_client(make_session_recorder())

        response = client.get("/scraper/details")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing `search` query parameter."}

    def test_trace_id_is_echoed(self, build_client, make_session_recorder):
        client = build_client(make_session_recorder())

        response = client.get(
            "/scraper/details",
            params={"search": "cto"},
            headers={"X-Trace-ID": "trace-123"},
        )

        assert response.headers["X-Trace-ID"] == "trace-123"


class TestLeads:
    def test_incomplete_entries_are_dropped(self, build_client, make_session_recorder, raw_result_blocks):
        recorder = make_session_recorder(raw_blocks=raw_result_blocks)
        client = build_client(recorder)

        response = client.post(
            "/scraper/leads",
            json={"industry": "it", "position": "engineer", "place": "pune"},
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["results"]) == 2
        assert body["count"] == 2
        assert body["query"] == "(engineer and pune and it) and linkedin profile"
        assert body["timestamp"]
        assert recorder.sessions[0].close_calls == 1

    @pytest.mark.parametrize(
        "payload",
        [
            {"position": "engineer", "place": "pune"},
            {"industry": "it", "place": "pune"},
            {"industry": "it", "position": "engineer", "place": ""},
            {},
        ],
    )
    def test_missing_fields_are_rejected(self, build_client, make_session_recorder, payload):
        recorder = make_session_recorder()
        client = build_client(recorder)

        response = client.post("/scraper/leads", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Missing required parameters"
        assert body["required"] == ["industry", "position", "place"]
        assert recorder.sessions == []

    def test_missing_body_is_rejected(self, build_client, make_session_recorder):
        recorder = make_session_recorder()
        client = build_client(recorder)

        response = client.post("/scraper/leads")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Missing required parameters"
        assert body["required"] == ["industry", "position", "place"]
        assert recorder.sessions == []

    def test_wrongly_typed_field_is_rejected(self, build_client, make_session_recorder):
        recorder = make_session_recorder()
        client = build_client(recorder)

        response = client.post(
            "/scraper/leads",
            json={"industry": 5, "position": "engineer", "place": "pune"},
        )

        assert response.status_code == 400
        body = response.json()
        assert set(body) == {"error", "message"}
        assert body["error"] == "Invalid request"
        assert "industry" in body["message"]
        assert recorder.sessions == []

    def test_malformed_json_is_rejected(self, build_client, make_session_recorder):
        client = build_client(make_session_recorder())

        response = client.post(
            "/scraper/leads",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert set(response.json()) == {"error", "message"}

    def test_scrape_failure_is_a_500_without_traceback(self, build_client, make_session_recorder):
        recorder = make_session_recorder(
            navigate_error=NavigationError("https://www.google.com/search", "timed out after 30000ms")
        )
        client = build_client(recorder)

        response = client.post(
            "/scraper/leads",
            json={"industry": "it", "position": "engineer", "place": "pune"},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Comprehensive scraping failed"
        assert "timed out" in body["message"]
        assert "Traceback" not in response.text
        assert recorder.sessions[0].close_calls == 1


class TestServiceEndpoints:
    def test_root(self, build_client, make_session_recorder):
        client = build_client(make_session_recorder())

        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "Welcome to Lead Generation API"

    def test_health(self, build_client, make_session_recorder):
        client = build_client(make_session_recorder())

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["app_version"]["major"] == 1
        assert body["resources"]["max_sessions"] == 2
