# ingres/workflow/enhanced_chat.py
import logging
import time
from typing import Dict, Optional

from ingres.errors import BadRequestError
from ingres.prompts.prompt_builder import build_database_context, build_knowledge_prompt
from ingres.prompts.system_prompts import NO_RESPONSE

logger = logging.getLogger(__name__)


def search_knowledge_base(database, query: str) -> Dict:

    return {
        "knowledge": database.search_knowledge(query),
        "schemes": database.search_schemes(query),
        "tips": database.search_tips(query),
    }


def chat_log_row(user_profile: Optional[Dict], message: str, reply: str) -> Dict:

    return {
        "user_id": (user_profile or {}).get("id") or "anonymous",
        "title": f"Chat: {message[:50]}...",
        "file_name": f"chat_{int(time.time() * 1000)}.txt",
        "file_path": "chat_logs",
        "original_name": "AI Chat Log",
        "mime_type": "text/plain",
        "file_size": len(message) + len(reply),
        "category": "chat_log",
        "description": "AI chat interaction",
        "extracted_text": f"User: {message}\n\nAI: {reply}",
        "is_local_only": True,
    }


def answer_with_knowledge(
    message: Optional[str],
    user_profile: Optional[Dict],
    database,
    llm_client,
) -> Dict:
    """
    Answer grounded in the knowledge base when it has anything relevant.

    Knowledge entries, active schemes, conservation tips and, when the
    profile has a location, location insights are looked up; any hit
    switches the prompt to database-first mode. The exchange is logged
    to the user's documents table.
    """

    if not message:
        raise BadRequestError("Message is required")

    location = (user_profile or {}).get("location") or ""

    search_results = search_knowledge_base(database, message)

    location_data = database.location_insights(location) if location else []

    has_content = bool(
        search_results["knowledge"]
        or search_results["schemes"]
        or search_results["tips"]
        or location_data
    )

    logger.info(
        "Database search results",
        extra={
            "knowledge_items": len(search_results["knowledge"]),
            "schemes": len(search_results["schemes"]),
            "tips": len(search_results["tips"]),
            "location_data": len(location_data),
            "has_relevant_content": has_content,
        },
    )

    context = build_database_context(search_results, location_data) if has_content else None

    reply = llm_client.generate(build_knowledge_prompt(message, context)) or NO_RESPONSE

    database.record_chat_log(chat_log_row(user_profile, message, reply))

    return {
        "success": True,
        "response": reply,
        "context_used": {
            "knowledge_items": len(search_results["knowledge"]),
            "schemes_found": len(search_results["schemes"]),
            "conservation_tips": len(search_results["tips"]),
            "location_data": len(location_data),
            "has_database_content": has_content,
            "response_type": "database_enhanced" if has_content else "general_knowledge",
        },
    }
