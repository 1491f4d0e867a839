# ingres/workflow/document_search.py
import re
from typing import Dict, List, Optional

from ingres.config import DOCUMENT_SEARCH_BROAD_RESULTS
from ingres.errors import BadRequestError
from ingres.storage.identity import generate_user_id


# First matching pattern narrows the results; order matters
NATURAL_LANGUAGE_PATTERNS = [
    (re.compile(r"aadhaar|aadhar", re.I), "ID Proofs", ["aadhaar"]),
    (re.compile(r"pan\s+card|pan", re.I), "ID Proofs", ["pan"]),
    (re.compile(r"passport", re.I), "ID Proofs", ["passport"]),
    (re.compile(r"bill|electricity|water|phone", re.I), "Bills", ["bill", "electricity", "water", "phone"]),
    (re.compile(r"scheme|subsidy|government", re.I), "Schemes", ["scheme", "subsidy", "government"]),
    (re.compile(r"medical|health|prescription|report", re.I), "Health", ["medical", "health", "prescription"]),
    (re.compile(r"education|certificate|degree|marksheet", re.I), "Education", ["certificate", "degree", "education"]),
    (re.compile(r"bank|statement|financial", re.I), "Financial", ["bank", "statement", "financial"]),
    (re.compile(r"property|legal|agreement", re.I), "Legal", ["property", "legal", "agreement"]),
]

EMPTY_RESULT_SUGGESTIONS = [
    "Try searching with document type (e.g., 'Aadhaar card', 'electricity bill')",
    "Search by category (ID Proofs, Bills, Schemes, Health, etc.)",
    "Use keywords from document content or filename",
]

BROAD_RESULT_SUGGESTIONS = [
    "Try adding more specific terms to narrow down results",
    "Filter by date range or category for better results",
]


def _matches_tags(doc: Dict, tags: List[str]) -> bool:

    doc_tags = [t.lower() for t in (doc.get("tags") or [])]
    title = (doc.get("title") or "").lower()
    original_name = (doc.get("original_name") or "").lower()

    for tag in tags:

        tag = tag.lower()

        if any(tag in doc_tag for doc_tag in doc_tags):
            return True

        if tag in title or tag in original_name:
            return True

    return False


def apply_natural_language_filter(query: str, documents: List[Dict]) -> List[Dict]:

    for pattern, category, tags in NATURAL_LANGUAGE_PATTERNS:

        if pattern.search(query):
            return [
                doc for doc in documents
                if doc.get("category") == category or _matches_tags(doc, tags)
            ]

    return documents


def search_suggestions(result_count: int) -> List[str]:

    if result_count == 0:
        return list(EMPTY_RESULT_SUGGESTIONS)

    if result_count > DOCUMENT_SEARCH_BROAD_RESULTS:
        return list(BROAD_RESULT_SUGGESTIONS)

    return []


def search_documents(
    query: Optional[str],
    user_name: Optional[str],
    filters: Optional[Dict],
    database,
) -> Dict:

    if not query or not user_name:
        raise BadRequestError("Query and userName are required")

    filters = filters or {}

    user_id = generate_user_id(user_name)

    documents = database.search_user_documents(user_id, query, filters)

    results = apply_natural_language_filter(query, documents)

    return {
        "success": True,
        "results": results,
        "totalResults": len(results),
        "query": query,
        "suggestions": search_suggestions(len(results)),
        "appliedFilters": filters,
    }
