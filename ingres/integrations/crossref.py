# ingres/integrations/crossref.py

"""
CrossRef REST client for the research panel.

Requests identify themselves (mailto + User-Agent) so they are served
from CrossRef's polite pool.
"""

import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import requests

from ingres.config import (
    CROSSREF_BASE_URL,
    CROSSREF_MAILTO,
    CROSSREF_USER_AGENT,
    HTTP_TIMEOUT_SECONDS,
)
from ingres.errors import UpstreamError


logger = logging.getLogger(__name__)


def _get(path: str, params: Dict) -> Dict:

    params = {**params, "mailto": CROSSREF_MAILTO}

    resp = requests.get(
        f"{CROSSREF_BASE_URL}{path}",
        params=params,
        headers={"User-Agent": CROSSREF_USER_AGENT},
        timeout=HTTP_TIMEOUT_SECONDS,
    )

    if not resp.ok:

        logger.error(
            "CrossRef API error",
            extra={"path": path, "status_code": resp.status_code},
        )

        raise UpstreamError(f"CrossRef API error: {resp.status_code}")

    return resp.json()


def search_works(query: str, limit: int = 10, offset: int = 0) -> Dict:
    return _get("/works", {"query": query, "rows": limit, "offset": offset})


def get_work_by_doi(doi: str) -> Dict:
    return _get(f"/works/{quote(doi, safe='')}", {})["message"]


def get_works_by_type(work_type: str, limit: int = 10, query: Optional[str] = None) -> Dict:

    params = {"filter": f"type:{work_type}", "rows": limit}

    if query:
        params["query"] = query

    return _get("/works", params)


def search_funders(query: str, limit: int = 10) -> Dict:
    return _get("/funders", {"query": query, "rows": limit})


def search_journals(query: str, limit: int = 10) -> Dict:
    return _get("/journals", {"query": query, "rows": limit})


# ============================================================
# DISPLAY HELPERS
# ============================================================

def format_authors(authors: Optional[List[Dict]]) -> str:

    if not authors:
        return "Unknown authors"

    names = []

    for author in authors:

        given = author.get("given")
        family = author.get("family")

        if given and family:
            names.append(f"{given} {family}")
        else:
            names.append(family or given or "Unknown")

    if len(names) == 1:
        return names[0]

    if len(names) == 2:
        return " and ".join(names)

    if len(names) == 3:
        return f"{names[0]}, {names[1]}, and {names[2]}"

    return ", ".join(names[:3]) + f" et al. ({len(names)} authors)"


def format_publication_date(published: Optional[Dict]) -> str:

    parts_list = (published or {}).get("date-parts") or []

    if not parts_list or not parts_list[0]:
        return "Unknown date"

    parts = parts_list[0]

    if len(parts) == 1:
        return str(parts[0])

    if len(parts) == 2:
        return f"{parts[1]}/{parts[0]}"

    return f"{parts[2]}/{parts[1]}/{parts[0]}"
