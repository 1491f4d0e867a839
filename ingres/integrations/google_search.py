# ingres/integrations/google_search.py

"""
Google Custom Search proxy.

The search type rewrites the query (site filters, topical keywords)
or forces a vendor option (PDF only, last year only) before the request
is forwarded; the vendor JSON is returned untouched.
"""

import logging
import re
from typing import Dict, List, Optional
from urllib.parse import urlparse

import requests

from ingres.config import (
    GOOGLE_SEARCH_API_KEY,
    GOOGLE_SEARCH_CX,
    GOOGLE_SEARCH_MAX_RESULTS,
    GOOGLE_SEARCH_URL,
    HTTP_TIMEOUT_SECONDS,
)
from ingres.errors import BadRequestError, ConfigurationError, UpstreamError


logger = logging.getLogger(__name__)


SEARCH_TYPES = ("web", "academic", "government", "water", "pdf", "recent")

_QUERY_SUFFIXES = {
    "academic": (
        "site:scholar.google.com OR site:researchgate.net "
        "OR site:arxiv.org OR site:pubmed.ncbi.nlm.nih.gov"
    ),
    "government": "site:gov.in OR site:nic.in OR site:india.gov.in",
    "water": "groundwater water resources hydrology",
}

# Search types that force a vendor parameter instead of rewriting the query
_FORCED_OPTIONS = {
    "pdf": ("fileType", "pdf"),
    "recent": ("dateRestrict", "y1"),
}

_PASSTHROUGH_OPTIONS = ("siteSearch", "fileType", "dateRestrict")


def build_search_query(query: str, search_type: str = "web") -> str:

    suffix = _QUERY_SUFFIXES.get(search_type)

    return f"{query} {suffix}" if suffix else query


def build_search_params(
    query: str,
    search_type: str = "web",
    options: Optional[Dict] = None,
    api_key: Optional[str] = None,
    cx: str = GOOGLE_SEARCH_CX,
) -> Dict[str, str]:

    options = dict(options or {})

    forced = _FORCED_OPTIONS.get(search_type)
    if forced:
        options[forced[0]] = forced[1]

    params = {
        "key": api_key or "",
        "cx": cx,
        "q": build_search_query(query, search_type),
    }

    if options.get("start"):
        params["start"] = str(options["start"])

    if options.get("num"):
        params["num"] = str(min(int(options["num"]), GOOGLE_SEARCH_MAX_RESULTS))

    for name in _PASSTHROUGH_OPTIONS:
        if options.get(name):
            params[name] = str(options[name])

    return params


def google_search(
    query: str,
    search_type: str = "web",
    options: Optional[Dict] = None,
    api_key: Optional[str] = GOOGLE_SEARCH_API_KEY,
) -> Dict:

    if not api_key:
        raise ConfigurationError("GOOGLE_SEARCH_API_KEY is not configured")

    if not query:
        raise BadRequestError("Search query is required")

    params = build_search_params(query, search_type, options, api_key=api_key)

    logger.info(
        "Making Google Search API request",
        extra={"search_type": search_type, "query_length": len(query)},
    )

    resp = requests.get(GOOGLE_SEARCH_URL, params=params, timeout=HTTP_TIMEOUT_SECONDS)

    if not resp.ok:

        try:
            vendor_message = resp.json().get("error", {}).get("message")
        except ValueError:
            vendor_message = None

        logger.error(
            "Google Search API error",
            extra={"status_code": resp.status_code, "vendor_message": vendor_message},
        )

        raise UpstreamError(
            f"Google Search API error: {resp.status_code} - "
            f"{vendor_message or 'Unknown error'}"
        )

    return resp.json()


# ============================================================
# DISPLAY HELPERS
# ============================================================

def extract_domain(url: str) -> str:

    host = urlparse(url).hostname

    if not host:
        return url

    return host.replace("www.", "", 1)


def format_snippet(snippet: str, search_terms: str) -> str:
    """Wrap every search term longer than two characters in <mark>."""

    formatted = snippet

    for term in search_terms.lower().split(" "):

        if len(term) > 2:
            formatted = re.sub(
                f"({re.escape(term)})",
                r"<mark>\1</mark>",
                formatted,
                flags=re.IGNORECASE,
            )

    return formatted


def search_suggestions(query: str) -> List[str]:

    lower = query.lower()
    suggestions: List[str] = []

    if "water" in lower or "ground" in lower:
        suggestions += [
            f"{query} management techniques",
            f"{query} conservation methods",
            f"{query} policy frameworks",
            f"{query} quality assessment",
        ]

    if "research" in lower or "study" in lower:
        suggestions += [
            f"{query} methodology",
            f"{query} case studies",
            f"{query} literature review",
            f"{query} data analysis",
        ]

    if "india" in lower or "indian" in lower:
        suggestions += [
            f"{query} states comparison",
            f"{query} regional patterns",
            f"{query} government schemes",
            f"{query} CGWB reports",
        ]

    return suggestions[:4]
