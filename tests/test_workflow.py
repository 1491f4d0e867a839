# tests/test_workflow.py
import pytest

from ingres.errors import BadRequestError, UpstreamError
from ingres.knowledge.seed_data import GOVERNMENT_SCHEMES, KNOWLEDGE_ENTRIES
from ingres.prompts.fallback_responses import RAINWATER_HARVESTING_REPLY
from ingres.prompts.system_prompts import EMPTY_REPLY, NO_RESPONSE
from ingres.storage.identity import generate_user_id
from ingres.workflow import pdf_extract
from ingres.workflow.chat import answer_chat
from ingres.workflow.document_search import (
    BROAD_RESULT_SUGGESTIONS,
    EMPTY_RESULT_SUGGESTIONS,
    apply_natural_language_filter,
    search_documents,
)
from ingres.workflow.enhanced_chat import answer_with_knowledge
from ingres.workflow.knowledge_ingestion import ingest_knowledge
from ingres.workflow.pdf_extract import extract_pdf, knowledge_title, load_pdf_text


class TestPersonaChat:

    def test_missing_message(self, fake_llm):
        with pytest.raises(BadRequestError, match="Message is required"):
            answer_chat("", None, "water", fake_llm)

    def test_model_reply(self, fake_llm):
        result = answer_chat(
            "How do I save water?",
            {"profile": {"district": "Ludhiana", "state": "Punjab"}},
            "water",
            fake_llm,
        )

        assert result == {"success": True, "response": "Model answer"}

        system_prompt, message = fake_llm.chats[0]
        assert "Ludhiana, Punjab" in system_prompt
        assert message == "How do I save water?"

    def test_offline_reply_when_providers_fail(self, fake_llm):
        fake_llm.fail = True

        result = answer_chat("rainwater harvesting ideas", {}, "water", fake_llm)

        assert result["success"] is True
        assert result["response"] == RAINWATER_HARVESTING_REPLY

    def test_empty_model_text(self, fake_llm):
        fake_llm.reply = ""

        assert answer_chat("hi", None, None, fake_llm)["response"] == EMPTY_REPLY


class TestKnowledgeChat:

    def test_general_knowledge_when_nothing_found(self, fake_llm, fake_db):
        result = answer_with_knowledge("What is an aquifer?", None, fake_db, fake_llm)

        assert result["success"] is True
        assert result["context_used"]["response_type"] == "general_knowledge"
        assert result["context_used"]["has_database_content"] is False
        assert "CONTEXT FROM DATABASE" not in fake_llm.prompts[0]

        log = fake_db.chat_logs[0]
        assert log["user_id"] == "anonymous"
        assert log["category"] == "chat_log"
        assert log["extracted_text"] == "User: What is an aquifer?\n\nAI: Model answer"

    def test_database_enhanced(self, fake_llm, fake_db):
        fake_db.knowledge = KNOWLEDGE_ENTRIES[:2]
        fake_db.schemes = GOVERNMENT_SCHEMES[:1]

        result = answer_with_knowledge(
            "groundwater schemes", {"id": "user-1"}, fake_db, fake_llm
        )

        used = result["context_used"]

        assert used["response_type"] == "database_enhanced"
        assert used["knowledge_items"] == 2
        assert used["schemes_found"] == 1
        assert used["conservation_tips"] == 0
        assert "CONTEXT FROM DATABASE" in fake_llm.prompts[0]
        assert GOVERNMENT_SCHEMES[0]["scheme_name"] in fake_llm.prompts[0]
        assert fake_db.chat_logs[0]["user_id"] == "user-1"

    def test_location_insights_from_profile(self, fake_llm, fake_db):
        fake_db.insights = [{
            "location_name": "Punjab",
            "metric_name": "Stage of extraction",
            "metric_value": 164,
            "metric_unit": "%",
        }]

        result = answer_with_knowledge(
            "How bad is it?", {"location": "punjab"}, fake_db, fake_llm
        )

        assert result["context_used"]["location_data"] == 1
        assert result["context_used"]["response_type"] == "database_enhanced"

    def test_model_failure_propagates(self, fake_llm, fake_db):
        fake_llm.fail = True

        with pytest.raises(UpstreamError):
            answer_with_knowledge("question", None, fake_db, fake_llm)

        assert fake_db.chat_logs == []

    def test_empty_model_text(self, fake_llm, fake_db):
        fake_llm.reply = ""

        assert answer_with_knowledge("q", None, fake_db, fake_llm)["response"] == NO_RESPONSE

    def test_missing_message(self, fake_llm, fake_db):
        with pytest.raises(BadRequestError):
            answer_with_knowledge(None, None, fake_db, fake_llm)


DOCUMENTS = [
    {"title": "Aadhaar front", "category": "ID Proofs", "tags": ["aadhaar"]},
    {"title": "March electricity", "category": "Bills", "tags": ["power"]},
    {"title": "Scan 12", "category": "Other", "tags": ["Aadhaar-copy"]},
]


class TestDocumentSearch:

    def test_natural_language_filter(self):
        results = apply_natural_language_filter("my aadhar card", DOCUMENTS)

        assert [d["title"] for d in results] == ["Aadhaar front", "Scan 12"]

    def test_no_pattern_keeps_everything(self):
        assert apply_natural_language_filter("random words", DOCUMENTS) == DOCUMENTS

    def test_requires_query_and_user(self, fake_db):
        with pytest.raises(BadRequestError, match="Query and userName are required"):
            search_documents("bill", "", {}, fake_db)

    def test_searches_with_derived_user_id(self, fake_db):
        user_id = generate_user_id("Ramesh")
        fake_db.user_documents = [dict(d, user_id=user_id) for d in DOCUMENTS]

        result = search_documents("electricity bill", "Ramesh", {"category": "all"}, fake_db)

        assert fake_db.document_queries[0][0] == user_id
        assert result["success"] is True
        assert result["totalResults"] == 1
        assert result["results"][0]["title"] == "March electricity"
        assert result["appliedFilters"] == {"category": "all"}
        assert result["suggestions"] == []

    def test_empty_result_suggestions(self, fake_db):
        result = search_documents("passport", "Nobody", None, fake_db)

        assert result["totalResults"] == 0
        assert result["suggestions"] == EMPTY_RESULT_SUGGESTIONS
        assert result["appliedFilters"] == {}

    def test_broad_result_suggestions(self, fake_db):
        user_id = generate_user_id("Ramesh")
        fake_db.user_documents = [
            {"title": f"doc {i}", "category": "Other", "user_id": user_id}
            for i in range(25)
        ]

        result = search_documents("everything", "Ramesh", {}, fake_db)

        assert result["totalResults"] == 25
        assert result["suggestions"] == BROAD_RESULT_SUGGESTIONS


class TestPdfExtraction:

    def test_extracts_text(self, sample_pdf):
        assert "Groundwater assessment report" in load_pdf_text(sample_pdf)

    def test_unreadable_pdf(self):
        with pytest.raises(UpstreamError):
            load_pdf_text(b"this is not a pdf")

    def test_too_large(self, monkeypatch, sample_pdf):
        monkeypatch.setattr(pdf_extract, "MAX_PDF_SIZE_MB", 0)

        with pytest.raises(BadRequestError, match="File too large"):
            load_pdf_text(sample_pdf)

    def test_knowledge_title(self):
        assert knowledge_title("docs/user/report.PDF", None) == "report"
        assert knowledge_title("docs/x.pdf", "CGWB Punjab 2023.pdf") == "CGWB Punjab 2023"

    def test_extract_and_store(self, fake_db, sample_pdf):
        fake_db.files["docs/report.pdf"] = sample_pdf

        result = extract_pdf("docs/report.pdf", "report.pdf", fake_db, language="hindi")

        assert result["success"] is True
        assert result["kbId"] == "kb-1"
        assert result["textLength"] > 0
        assert "Groundwater" in result["preview"]

        row = fake_db.inserted_knowledge[0]
        assert row["title"] == "report"
        assert row["category"] == "pdf_fulltext"
        assert row["language"] == "hindi"
        assert row["tags"] == ["pdf", "fulltext"]

    def test_insert_failure_keeps_text(self, fake_db, sample_pdf):
        fake_db.files["docs/report.pdf"] = sample_pdf
        fake_db.fail_insert = True

        result = extract_pdf("docs/report.pdf", None, fake_db)

        assert result["success"] is True
        assert result["kbId"] is None
        assert result["textLength"] > 0

    def test_no_upsert(self, fake_db, sample_pdf):
        fake_db.files["docs/report.pdf"] = sample_pdf

        result = extract_pdf("docs/report.pdf", None, fake_db, upsert_to_knowledge_base=False)

        assert result["kbId"] is None
        assert fake_db.inserted_knowledge == []

    def test_missing_file_path(self, fake_db):
        with pytest.raises(BadRequestError, match="filePath is required"):
            extract_pdf(None, None, fake_db)

    def test_download_failure(self, fake_db):
        with pytest.raises(UpstreamError, match="Failed to download file"):
            extract_pdf("docs/missing.pdf", None, fake_db)


class TestKnowledgeIngestion:

    def test_ingest_stats(self, fake_db):
        result = ingest_knowledge("ingest", fake_db)

        assert result["success"] is True
        assert result["stats"] == {
            "knowledge_entries": 4,
            "government_schemes": 3,
            "water_insights": 2,
            "conservation_tips": 2,
        }
        assert [table for table, _, _ in fake_db.upserts] == [
            "knowledge_base",
            "government_schemes",
            "water_resources_insights",
            "conservation_tips",
        ]

    def test_invalid_action(self, fake_db):
        with pytest.raises(BadRequestError, match="Invalid action"):
            ingest_knowledge("delete", fake_db)

        assert fake_db.upserts == []

    def test_failing_table_aborts(self, fake_db):
        fake_db.fail_upsert_table = "water_resources_insights"

        with pytest.raises(RuntimeError):
            ingest_knowledge("ingest", fake_db)

        assert len(fake_db.upserts) == 2
