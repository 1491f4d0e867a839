# ingres/observability/posthog_client.py

"""
PostHog event tracking for the edge functions.

- Disabled when POSTHOG_API_KEY is not set
- Uses the per-request id as distinct_id
- Tracking failures are logged, never raised
"""

import logging
from typing import Optional, Dict, Any

from posthog import Posthog

from ingres.config import POSTHOG_API_KEY, POSTHOG_HOST


logger = logging.getLogger(__name__)


class PostHogClient:
    """Thin wrapper that turns edge-function outcomes into PostHog events."""

    def __init__(self, api_key: Optional[str] = POSTHOG_API_KEY, host: str = POSTHOG_HOST):

        self._enabled = False
        self._client: Optional[Posthog] = None

        if not api_key:
            logger.warning(
                "PostHog disabled: POSTHOG_API_KEY not set"
            )
            return

        try:

            self._client = Posthog(
                project_api_key=api_key,
                host=host,
                timeout=5,
                flush_interval=1,
            )

            self._enabled = True

            logger.info(
                "PostHog client initialized",
                extra={"host": host}
            )

        except Exception as e:

            logger.error(
                "PostHog initialization failed",
                extra={"error": str(e)}
            )

            self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled


    # ==========================================================
    # INTERNAL SAFE TRACK
    # ==========================================================

    def _track(
        self,
        distinct_id: str,
        event: str,
        properties: Optional[Dict[str, Any]] = None,
    ):

        if not self._enabled or not self._client:
            return

        try:

            self._client.capture(
                distinct_id=distinct_id,
                event=event,
                properties=properties or {},
            )

        except Exception as e:

            logger.warning(
                "PostHog tracking failed",
                extra={
                    "event": event,
                    "error": str(e),
                }
            )


    def identify_request(
        self,
        distinct_id: str,
        properties: Optional[Dict[str, Any]] = None,
    ):

        if not self._enabled or not self._client:
            return

        try:

            self._client.identify(
                distinct_id=distinct_id,
                properties=properties or {},
            )

        except Exception as e:

            logger.warning(
                "PostHog identify failed",
                extra={"error": str(e)}
            )


    # ==========================================================
    # EDGE FUNCTION EVENTS
    # ==========================================================

    def track_chat(
        self,
        distinct_id: str,
        chat_type: str,
        response_type: str,
        message_length: int,
        latency: float,
    ):

        self._track(
            distinct_id,
            "chat_answered",
            {
                "chat_type": chat_type,
                "response_type": response_type,
                "message_length": message_length,
                "latency_seconds": latency,
            },
        )

    def track_search(
        self,
        distinct_id: str,
        search_type: str,
        results: int,
        latency: float,
    ):

        self._track(
            distinct_id,
            "search_completed",
            {
                "search_type": search_type,
                "results": results,
                "latency_seconds": latency,
            },
        )

    def track_pdf_extraction(
        self,
        distinct_id: str,
        file_path: str,
        text_length: int,
        stored: bool,
        latency: float,
    ):

        self._track(
            distinct_id,
            "pdf_extracted",
            {
                "file_path": file_path,
                "text_length": text_length,
                "stored_in_knowledge_base": stored,
                "latency_seconds": latency,
            },
        )

    def track_event(
        self,
        distinct_id: str,
        event: str,
        properties: Optional[Dict[str, Any]] = None,
    ):

        self._track(distinct_id, event, properties)


    # ==========================================================
    # ERROR TRACKING
    # ==========================================================

    def track_error(
        self,
        distinct_id: str,
        error_type: str,
        error_message: str,
        endpoint: str,
    ):

        self._track(
            distinct_id,
            "system_error",
            {
                "error_type": error_type,
                "error_message": error_message,
                "endpoint": endpoint,
            },
        )


# ==============================================================
# GLOBAL SINGLETON
# ==============================================================

posthog_client = PostHogClient()
