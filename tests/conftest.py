# tests/conftest.py
import os
import sys
import tempfile

import pytest

# Keep test runs away from real vendors and the working tree
_TMP = tempfile.mkdtemp(prefix="ingres-tests-")
os.environ["METRICS_PATH"] = os.path.join(_TMP, "metrics.json")
os.environ["LOG_DIR"] = os.path.join(_TMP, "logs")
os.environ["LOCAL_STORE_PATH"] = os.path.join(_TMP, "local_store.json")
for _key in ("GEMINI_API_KEY", "OPENAI_API_KEY", "GOOGLE_SEARCH_API_KEY",
             "RESEND_API_KEY", "POSTHOG_API_KEY", "SUPABASE_URL",
             "SUPABASE_SERVICE_ROLE_KEY"):
    os.environ.pop(_key, None)

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fastapi.testclient import TestClient  # noqa: E402

from ingres.errors import UpstreamError  # noqa: E402
from ingres.main import app  # noqa: E402


class FakeLLM:
    """Records prompts; answers with `reply` or raises when `fail` is set."""

    def __init__(self, reply="Model answer", fail=False):
        self.reply = reply
        self.fail = fail
        self.prompts = []
        self.chats = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.fail:
            raise UpstreamError("Gemini API error: Service Unavailable")
        return self.reply

    def generate_chat(self, system_prompt, message):
        self.chats.append((system_prompt, message))
        if self.fail:
            raise UpstreamError("All language model providers failed")
        return self.reply

    def get_usage_stats(self):
        return {
            "gemini_available": True,
            "openai_available": False,
            "pollinations_available": True,
        }


class FakeDatabase:
    """In-memory stand-in for the Supabase tables and documents bucket."""

    configured = True

    def __init__(self):
        self.knowledge = []
        self.schemes = []
        self.tips = []
        self.insights = []
        self.user_documents = []
        self.files = {}
        self.chat_logs = []
        self.inserted_knowledge = []
        self.upserts = []
        self.document_queries = []
        self.fail_insert = False
        self.fail_upsert_table = None

    def search_knowledge(self, query, limit=5):
        return self.knowledge[:limit]

    def search_schemes(self, query, limit=3):
        return self.schemes[:limit]

    def search_tips(self, query, limit=3):
        return self.tips[:limit]

    def location_insights(self, location, limit=5):
        return [
            row for row in self.insights
            if location.lower() in row["location_name"].lower()
        ][:limit]

    def search_user_documents(self, user_id, query, filters=None, limit=50):
        self.document_queries.append((user_id, query, filters))
        return [d for d in self.user_documents if d.get("user_id") == user_id][:limit]

    def record_chat_log(self, row):
        self.chat_logs.append(row)

    def insert_knowledge(self, row):
        if self.fail_insert:
            raise RuntimeError("duplicate key value violates unique constraint")
        self.inserted_knowledge.append(row)
        return f"kb-{len(self.inserted_knowledge)}"

    def upsert(self, table, rows, on_conflict):
        if table == self.fail_upsert_table:
            raise RuntimeError(f"relation \"{table}\" does not exist")
        self.upserts.append((table, len(rows), on_conflict))

    def download_document(self, file_path, bucket="documents"):
        if file_path not in self.files:
            raise UpstreamError("Failed to download file: Object not found")
        return self.files[file_path]


class FakeEmailClient:

    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def send_contact_messages(self, name, email, message):
        if self.fail:
            raise UpstreamError("Email API error: 422 - Invalid `to` field")
        self.sent.append((name, email, message))
        return {"notification": {"id": "n1"}, "confirmation": {"id": "c1"}}


def make_pdf(text: str) -> bytes:
    """Single-page PDF showing `text` in Helvetica, with a correct xref table."""

    content = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []

    for number, body in enumerate(objects, 1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1, xref_at
    )

    return bytes(out)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def fake_llm(monkeypatch):
    from ingres.api import routes

    llm = FakeLLM()
    monkeypatch.setattr(routes, "llm_client", llm)
    return llm


@pytest.fixture
def fake_db(monkeypatch):
    from ingres.api import routes

    db = FakeDatabase()
    monkeypatch.setattr(routes, "database", db)
    return db


@pytest.fixture
def fake_email(monkeypatch):
    from ingres.api import routes

    mailer = FakeEmailClient()
    monkeypatch.setattr(routes, "email_client", mailer)
    return mailer


@pytest.fixture
def sample_pdf():
    return make_pdf("Groundwater assessment report for Punjab")
