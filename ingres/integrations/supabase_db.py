# ingres/integrations/supabase_db.py

"""
Managed database access (Supabase / PostgREST).

All table reads and writes the edge functions perform go through
`KnowledgeDatabase`, so routes and workflows never touch the vendor
query builder directly and tests can swap in a fake.

Search helpers return [] on a PostgREST error (logged), the way the
chat keeps answering from general knowledge when a lookup fails.
Writes and downloads raise.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from supabase import Client, create_client

from ingres.config import (
    DOCUMENTS_BUCKET,
    DOCUMENT_SEARCH_LIMIT,
    KNOWLEDGE_SEARCH_LIMIT,
    LOCATION_INSIGHT_LIMIT,
    SCHEME_SEARCH_LIMIT,
    SUPABASE_SERVICE_ROLE_KEY,
    SUPABASE_URL,
    TIP_SEARCH_LIMIT,
)
from ingres.errors import ConfigurationError, UpstreamError


logger = logging.getLogger(__name__)

_PUNCTUATION = re.compile(r"[^\w\s]")


class KnowledgeDatabase:

    def __init__(self, url: str = SUPABASE_URL, key: str = SUPABASE_SERVICE_ROLE_KEY):

        self._url = url
        self._key = key
        self._client: Optional[Client] = None

    @property
    def configured(self) -> bool:
        return bool(self._url and self._key)

    @property
    def client(self) -> Client:

        if self._client is None:

            if not self.configured:
                raise ConfigurationError(
                    "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set"
                )

            self._client = create_client(self._url, self._key)

            logger.info("Supabase client created")

        return self._client

    # ============================================================
    # KNOWLEDGE SEARCH
    # ============================================================

    def _safe_rows(self, table: str, query) -> List[Dict[str, Any]]:

        try:
            return query.execute().data or []

        except APIError as e:

            logger.warning(
                "Database search failed",
                extra={"table": table, "error": str(e)},
            )
            return []

    def search_knowledge(self, query: str, limit: int = KNOWLEDGE_SEARCH_LIMIT) -> List[Dict]:

        return self._safe_rows(
            "knowledge_base",
            self.client.table("knowledge_base")
            .select("*")
            .text_search("search_vector", query, options={"type": "websearch"})
            .limit(limit),
        )

    def search_schemes(self, query: str, limit: int = SCHEME_SEARCH_LIMIT) -> List[Dict]:

        return self._safe_rows(
            "government_schemes",
            self.client.table("government_schemes")
            .select("*")
            .text_search("search_vector", query, options={"type": "websearch"})
            .eq("is_active", True)
            .limit(limit),
        )

    def search_tips(self, query: str, limit: int = TIP_SEARCH_LIMIT) -> List[Dict]:

        return self._safe_rows(
            "conservation_tips",
            self.client.table("conservation_tips")
            .select("*")
            .text_search("search_vector", query, options={"type": "websearch"})
            .limit(limit),
        )

    def location_insights(self, location: str, limit: int = LOCATION_INSIGHT_LIMIT) -> List[Dict]:

        return self._safe_rows(
            "water_resources_insights",
            self.client.table("water_resources_insights")
            .select("*")
            .ilike("location_name", f"%{location}%")
            .limit(limit),
        )

    # ============================================================
    # USER DOCUMENTS
    # ============================================================

    def search_user_documents(
        self,
        user_id: str,
        query: str,
        filters: Optional[Dict] = None,
        limit: int = DOCUMENT_SEARCH_LIMIT,
    ) -> List[Dict]:
        """Full-text search over one user's documents, newest first."""

        filters = filters or {}

        builder = (
            self.client.table("user_documents")
            .select("*")
            .eq("user_id", user_id)
            .text_search("title,description,extracted_text", _PUNCTUATION.sub("", query))
            .order("upload_date", desc=True)
        )

        category = filters.get("category")
        if category and category != "all":
            builder = builder.eq("category", category)

        date_range = filters.get("dateRange") or {}
        if date_range.get("start"):
            builder = builder.gte("upload_date", date_range["start"])
        if date_range.get("end"):
            builder = builder.lte("upload_date", date_range["end"])

        if filters.get("tags"):
            builder = builder.overlaps("tags", filters["tags"])

        return builder.limit(limit).execute().data or []

    def record_chat_log(self, row: Dict) -> None:

        try:
            self.client.table("user_documents").insert(row).execute()

        except APIError as e:

            logger.warning(
                "Chat log insert failed",
                extra={"error": str(e)},
            )

    # ============================================================
    # WRITES
    # ============================================================

    def insert_knowledge(self, row: Dict) -> Optional[str]:

        result = self.client.table("knowledge_base").insert(row).execute()

        rows = result.data or []

        return rows[0].get("id") if rows else None

    def upsert(self, table: str, rows: List[Dict], on_conflict: str) -> None:

        (
            self.client.table(table)
            .upsert(rows, on_conflict=on_conflict, ignore_duplicates=False)
            .execute()
        )

    # ============================================================
    # STORAGE
    # ============================================================

    def download_document(self, file_path: str, bucket: str = DOCUMENTS_BUCKET) -> bytes:

        try:
            data = self.client.storage.from_(bucket).download(file_path)

        except Exception as e:
            raise UpstreamError(f"Failed to download file: {e}") from e

        if not data:
            raise UpstreamError("Failed to download file: unknown error")

        return data
