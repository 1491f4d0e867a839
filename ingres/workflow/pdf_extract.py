# ingres/workflow/pdf_extract.py

"""
Full-text extraction for PDFs already uploaded to the documents bucket.

download → pypdf text extraction → (optional) knowledge_base row
"""

import io
import logging
import re
from typing import Dict, Optional

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ingres.config import MAX_PDF_SIZE_MB, PREVIEW_CHARS
from ingres.errors import BadRequestError, UpstreamError

logger = logging.getLogger(__name__)

_PDF_SUFFIX = re.compile(r"\.pdf$", re.I)


# ============================================================
# PDF TEXT
# ============================================================

def load_pdf_text(content: bytes) -> str:
    """All pages' text merged into one string, pages separated by newlines."""

    size_mb = len(content) / (1024 * 1024)

    if size_mb > MAX_PDF_SIZE_MB:
        raise BadRequestError(f"File too large: {size_mb:.2f}MB")

    try:
        reader = PdfReader(io.BytesIO(content))

    except PdfReadError as e:
        raise UpstreamError(f"Could not read PDF: {e}") from e

    parts = []

    for page in reader.pages:

        text = page.extract_text()

        if text:
            parts.append(text)

    return "\n".join(parts)


def knowledge_title(file_path: str, original_name: Optional[str]) -> str:

    name = original_name or file_path.split("/")[-1] or "PDF Document"

    return _PDF_SUFFIX.sub("", name)


def knowledge_row(text: str, file_path: str, original_name: Optional[str], language: str) -> Dict:

    title = knowledge_title(file_path, original_name)

    return {
        "title": title,
        "content": text,
        "category": "pdf_fulltext",
        "source_document": original_name or f"{title}.pdf",
        "language": language,
        "tags": ["pdf", "fulltext"],
    }


# ============================================================
# ENTRY POINT
# ============================================================

def extract_pdf(
    file_path: Optional[str],
    original_name: Optional[str],
    database,
    upsert_to_knowledge_base: bool = True,
    language: str = "english",
) -> Dict:

    if not file_path:
        raise BadRequestError("filePath is required")

    content = database.download_document(file_path)

    text = load_pdf_text(content)

    logger.info(
        "PDF text extracted",
        extra={"file_path": file_path, "text_length": len(text)},
    )

    kb_id = None

    if upsert_to_knowledge_base:

        try:
            kb_id = database.insert_knowledge(
                knowledge_row(text, file_path, original_name, language)
            )

        except Exception as e:

            # A failed insert still returns the extracted text
            logger.error(
                "KB insert error",
                extra={"file_path": file_path, "error": str(e)},
                exc_info=True,
            )

    return {
        "success": True,
        "textLength": len(text),
        "kbId": kb_id,
        "preview": text[:PREVIEW_CHARS],
    }
