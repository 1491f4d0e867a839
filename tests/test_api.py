# tests/test_api.py
import pytest

from ingres.api import routes
from ingres.errors import UpstreamError
from ingres.integrations import crossref
from ingres.prompts.fallback_responses import (
    BUDGET_BACKUP_REPLY,
    GROUNDWATER_STATUS_REPLY,
    WATER_BACKUP_REPLY,
)


class TestServiceEndpoints:

    def test_root_lists_functions(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "POST /gemini-chat" in response.json()["functions"]

    def test_health(self, client, fake_llm, fake_db):
        response = client.get("/health")

        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["gemini_available"] is True
        assert data["openai_available"] is False
        assert data["database_configured"] is True

    def test_metrics_counts_functions(self, client, fake_db):
        client.post("/pdf-knowledge-ingestion", json={"action": "ingest"})
        client.post("/pdf-knowledge-ingestion", json={"action": "wipe"})

        data = client.get("/metrics").json()

        counters = data["functions"]["pdf-knowledge-ingestion"]
        assert counters["calls"] >= 2
        assert counters["failures"] >= 1
        assert "p95_latency" in data
        assert "latencies" not in data

    def test_cors_preflight(self, client):
        response = client.options(
            "/gemini-chat",
            headers={
                "Origin": "https://ingres.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestGeminiChat:

    def test_persona_reply(self, client, fake_llm):
        response = client.post(
            "/gemini-chat",
            json={"message": "Plan my drip budget", "chatType": "budget"},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "response": "Model answer"}
        assert "Budget Bro" in fake_llm.chats[0][0]

    def test_offline_reply_when_models_down(self, client, fake_llm):
        fake_llm.fail = True

        response = client.post("/gemini-chat", json={"message": "groundwater status"})

        assert response.status_code == 200
        assert response.json()["response"] == GROUNDWATER_STATUS_REPLY

    def test_backup_mode_on_error(self, client, fake_llm):
        response = client.post("/gemini-chat", json={"chatType": "budget"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "response": BUDGET_BACKUP_REPLY}

    def test_backup_mode_defaults_to_water(self, client, fake_llm):
        response = client.post("/gemini-chat", json={})

        assert response.json()["response"] == WATER_BACKUP_REPLY

    def test_enhanced_knowledge_delegation(self, client, fake_llm, fake_db):
        response = client.post(
            "/gemini-chat",
            json={
                "message": "What is recharge?",
                "useEnhancedKnowledge": True,
                "context": {"profile": {"id": "user-7"}},
            },
        )

        assert response.status_code == 200
        assert response.json()["context_used"]["response_type"] == "general_knowledge"
        assert fake_db.chat_logs[0]["user_id"] == "user-7"

    def test_enhanced_knowledge_failure_still_200(self, client, fake_llm, fake_db):
        """Knowledge chat errors keep their body but never the 500 status."""
        fake_llm.fail = True

        response = client.post(
            "/gemini-chat",
            json={"message": "What is recharge?", "useEnhancedKnowledge": True},
        )

        assert response.status_code == 200
        assert response.json() == {
            "error": "Failed to process chat request",
            "details": "Gemini API error: Service Unavailable",
        }

    def test_enhanced_knowledge_missing_message(self, client, fake_llm, fake_db):
        response = client.post("/gemini-chat", json={"useEnhancedKnowledge": True})

        assert response.status_code == 200
        assert response.json()["details"] == "Message is required"


class TestEnhancedChat:

    def test_grounded_answer(self, client, fake_llm, fake_db):
        fake_db.tips = [{"title": "Mulching", "description": "Cover soil"}]

        response = client.post(
            "/enhanced-ai-chat",
            json={"message": "How to reduce evaporation?", "userProfile": {"id": "u1"}},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["context_used"]["conservation_tips"] == 1
        assert data["context_used"]["response_type"] == "database_enhanced"

    def test_missing_message(self, client, fake_llm, fake_db):
        response = client.post("/enhanced-ai-chat", json={})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Failed to process chat request",
            "details": "Message is required",
        }

    def test_model_failure(self, client, fake_llm, fake_db):
        fake_llm.fail = True

        response = client.post("/enhanced-ai-chat", json={"message": "hi"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to process chat request"


class TestGoogleSearch:

    def test_unconfigured_key(self, client):
        response = client.post("/google-search", json={"query": "aquifer"})

        assert response.status_code == 500

        data = response.json()
        assert data["success"] is False
        assert "GOOGLE_SEARCH_API_KEY" in data["error"]
        assert data["fallbackResponse"] == routes.SEARCH_FALLBACK_MESSAGE

    def test_results_wrapped(self, client, monkeypatch):
        seen = {}

        def fake_search(query, search_type, options):
            seen.update(query=query, search_type=search_type, options=options)
            return {"items": [{"title": "Dynamic Groundwater Resources"}]}

        monkeypatch.setattr(routes, "google_search", fake_search)

        response = client.post(
            "/google-search",
            json={"query": "aquifer", "searchType": "pdf", "options": {"num": 5}},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {"items": [{"title": "Dynamic Groundwater Resources"}]},
            "searchType": "pdf",
        }
        assert seen == {"query": "aquifer", "search_type": "pdf", "options": {"num": 5}}


class TestDocumentSearchEndpoint:

    def test_missing_fields(self, client, fake_db):
        response = client.post("/ai-document-search", json={"query": "bill"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Query and userName are required",
        }

    def test_search(self, client, fake_db):
        response = client.post(
            "/ai-document-search",
            json={"query": "passport", "userName": "Ramesh", "filters": {"category": "ID Proofs"}},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["totalResults"] == 0
        assert data["appliedFilters"] == {"category": "ID Proofs"}
        assert len(data["suggestions"]) == 3


class TestPdfEndpoints:

    def test_extract(self, client, fake_db, sample_pdf):
        fake_db.files["u1/report.pdf"] = sample_pdf

        response = client.post(
            "/pdf-fulltext-extract",
            json={"filePath": "u1/report.pdf", "originalName": "report.pdf"},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["kbId"] == "kb-1"
        assert "Groundwater" in data["preview"]

    def test_extract_missing_path(self, client, fake_db):
        response = client.post("/pdf-fulltext-extract", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "filePath is required"}

    def test_extract_download_failure(self, client, fake_db):
        response = client.post("/pdf-fulltext-extract", json={"filePath": "missing.pdf"})

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert "Failed to download file" in response.json()["error"]

    def test_ingestion(self, client, fake_db):
        response = client.post("/pdf-knowledge-ingestion", json={"action": "ingest"})

        assert response.status_code == 200
        assert response.json()["stats"]["government_schemes"] == 3

    def test_ingestion_invalid_action(self, client, fake_db):
        response = client.post("/pdf-knowledge-ingestion", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid action"}

    def test_ingestion_database_failure(self, client, fake_db):
        fake_db.fail_upsert_table = "knowledge_base"

        response = client.post("/pdf-knowledge-ingestion", json={"action": "ingest"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to ingest PDF knowledge"
        assert "knowledge_base" in response.json()["details"]


class TestContactEmail:

    def test_send(self, client, fake_email):
        response = client.post(
            "/send-contact-email",
            json={"name": "Asha", "email": "asha@example.com", "message": "Hello"},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert fake_email.sent == [("Asha", "asha@example.com", "Hello")]

    @pytest.mark.parametrize("payload", [
        {"email": "asha@example.com", "message": "Hello"},
        {"name": "   ", "email": "asha@example.com", "message": "Hello"},
        {"name": "Asha", "email": "asha@example.com", "message": ""},
    ])
    def test_missing_fields(self, client, fake_email, payload):
        response = client.post("/send-contact-email", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}
        assert fake_email.sent == []

    def test_wrong_method(self, client):
        response = client.get("/send-contact-email")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}

    def test_mail_failure(self, client, fake_email):
        fake_email.fail = True

        response = client.post(
            "/send-contact-email",
            json={"name": "Asha", "email": "asha@example.com", "message": "Hello"},
        )

        assert response.status_code == 500
        assert "Email API error" in response.json()["error"]


class TestResearchEndpoints:

    def test_search_works(self, client, monkeypatch):
        monkeypatch.setattr(
            crossref,
            "search_works",
            lambda query, limit, offset: {"message": {"items": [], "query": query, "rows": limit}},
        )

        response = client.get("/research/works", params={"query": "aquifer", "limit": 3})

        assert response.status_code == 200
        assert response.json()["data"]["message"]["rows"] == 3

    def test_query_required(self, client):
        assert client.get("/research/works").status_code == 422

    def test_work_by_doi(self, client, monkeypatch):
        monkeypatch.setattr(crossref, "get_work_by_doi", lambda doi: {"DOI": doi})

        response = client.get("/research/works/10.1016/j.jhydrol.2020.125")

        assert response.status_code == 200
        assert response.json()["data"]["DOI"] == "10.1016/j.jhydrol.2020.125"

    def test_works_by_type(self, client, monkeypatch):
        seen = {}

        def fake_by_type(work_type, limit, query):
            seen.update(work_type=work_type, limit=limit, query=query)
            return {"message": {"items": []}}

        monkeypatch.setattr(crossref, "get_works_by_type", fake_by_type)

        response = client.get(
            "/research/types/journal-article/works", params={"query": "aquifer", "limit": 4}
        )

        assert response.status_code == 200
        assert seen == {"work_type": "journal-article", "limit": 4, "query": "aquifer"}

    def test_funders_and_journals(self, client, monkeypatch):
        monkeypatch.setattr(crossref, "search_funders", lambda query, limit: {"kind": "funders"})
        monkeypatch.setattr(crossref, "search_journals", lambda query, limit: {"kind": "journals"})

        funders = client.get("/research/funders", params={"query": "water"})
        journals = client.get("/research/journals", params={"query": "hydrology"})

        assert funders.json() == {"success": True, "data": {"kind": "funders"}}
        assert journals.json() == {"success": True, "data": {"kind": "journals"}}

    def test_crossref_failure(self, client, monkeypatch):
        def failing(query, limit):
            raise UpstreamError("CrossRef API error: 503")

        monkeypatch.setattr(crossref, "search_journals", failing)

        response = client.get("/research/journals", params={"query": "hydrology"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "CrossRef API error: 503"}
