# ingres/config.py
"""
Configuration for the INGRES-AI edge-function service.

Every vendor credential and tunable lives here.
Credentials come from the environment; everything else is a constant.
"""

import os


# ========== LANGUAGE MODELS ==========

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash-latest")

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

# Keyless text endpoint used when both hosted models fail
POLLINATIONS_URL = os.getenv("POLLINATIONS_URL", "https://text.pollinations.ai/")

# Generation parameters
LLM_TEMPERATURE = 0.7
LLM_TOP_K = 40
LLM_TOP_P = 0.95
LLM_MAX_TOKENS = 1024

SAFETY_CATEGORIES = [
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
]
SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"


# ========== WEB SEARCH ==========

GOOGLE_SEARCH_API_KEY = os.getenv("GOOGLE_SEARCH_API_KEY")
GOOGLE_SEARCH_CX = os.getenv("GOOGLE_SEARCH_CX", "c35c85b4f765b4693")
GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
GOOGLE_SEARCH_MAX_RESULTS = 10  # vendor cap per request


# ========== RESEARCH (CROSSREF) ==========

CROSSREF_BASE_URL = "https://api.crossref.org"
CROSSREF_MAILTO = os.getenv("CROSSREF_MAILTO", "research@ingres-ai.org")
CROSSREF_USER_AGENT = (
    f"INGRES-AI-Research/1.0 (https://ingres-ai.org; mailto:{CROSSREF_MAILTO})"
)


# ========== DATABASE (SUPABASE) ==========

SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
DOCUMENTS_BUCKET = "documents"


# ========== EMAIL (RESEND) ==========

RESEND_API_KEY = os.getenv("RESEND_API_KEY")
RESEND_API_URL = "https://api.resend.com/emails"
CONTACT_INBOX = os.getenv("CONTACT_INBOX", "harshitabhaskaruni@gmail.com")
EMAIL_FROM_CONTACT = os.getenv(
    "EMAIL_FROM_CONTACT", "INGRES-AI Contact <onboarding@resend.dev>"
)
EMAIL_FROM_TEAM = os.getenv(
    "EMAIL_FROM_TEAM", "INGRES-AI Team <onboarding@resend.dev>"
)
LINKEDIN_URL = "https://in.linkedin.com/in/harshitabhaskaruni1117"


# ========== OUTBOUND HTTP ==========

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))


# ========== LOCAL STORAGE ==========

LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH", "storage/local_store.json")

CHAT_HISTORY_LIMIT = 20
BUDGET_HISTORY_LIMIT = 50


# ========== CHAT / SEARCH LIMITS ==========

CONVERSATION_MEMORY = 10  # history messages folded into the prompt

KNOWLEDGE_SEARCH_LIMIT = 5
SCHEME_SEARCH_LIMIT = 3
TIP_SEARCH_LIMIT = 3
LOCATION_INSIGHT_LIMIT = 5

DOCUMENT_SEARCH_LIMIT = 50
DOCUMENT_SEARCH_BROAD_RESULTS = 20  # above this, suggest narrowing


# ========== PDF EXTRACTION ==========

MAX_PDF_SIZE_MB = 25
PREVIEW_CHARS = 500


# ========== OBSERVABILITY ==========

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")
METRICS_PATH = os.getenv("METRICS_PATH", "storage/metrics.json")

POSTHOG_API_KEY = os.getenv("POSTHOG_API_KEY")
POSTHOG_HOST = os.getenv("POSTHOG_HOST", "https://app.posthog.com")
