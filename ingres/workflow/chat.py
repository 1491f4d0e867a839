# ingres/workflow/chat.py
import logging
from typing import Dict, Optional

from ingres.errors import BadRequestError, IngresError
from ingres.prompts.fallback_responses import offline_reply
from ingres.prompts.prompt_builder import build_chat_system_prompt
from ingres.prompts.system_prompts import EMPTY_REPLY

logger = logging.getLogger(__name__)


def answer_chat(
    message: Optional[str],
    context: Optional[Dict],
    chat_type: Optional[str],
    llm_client,
) -> Dict:
    """
    Persona chat (groundwater assistant or Budget Bro).

    When every model provider fails the reply is a canned answer
    picked from keywords in the message, so the user always gets
    something useful back.
    """

    if not message:
        raise BadRequestError("Message is required")

    context = context or {}

    system_prompt = build_chat_system_prompt(
        chat_type,
        profile=context.get("profile"),
        history=context.get("conversationHistory"),
    )

    try:

        text = llm_client.generate_chat(system_prompt, message)

    except IngresError as e:

        logger.warning(
            "All providers failed, using offline reply",
            extra={"error": str(e), "chat_type": chat_type},
        )

        text = offline_reply(message, chat_type or "")

    return {
        "success": True,
        "response": text or EMPTY_REPLY,
    }
