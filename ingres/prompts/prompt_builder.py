# ingres/prompts/prompt_builder.py

from typing import Dict, List, Optional

from ingres.config import CONVERSATION_MEMORY
from ingres.prompts.system_prompts import (
    BUDGET_BRO_SYSTEM_PROMPT,
    DATABASE_PRIORITY_NOTE,
    GENERAL_KNOWLEDGE_NOTE,
    KNOWLEDGE_SYSTEM_PROMPT,
    WATER_ASSISTANT_SYSTEM_PROMPT,
)


def build_chat_system_prompt(
    chat_type: Optional[str],
    profile: Optional[Dict] = None,
    history: Optional[List[Dict]] = None,
) -> str:
    """
    System prompt for the persona chat.

    chat_type:
        "budget" → Budget Bro
        anything else → groundwater assistant

    The user's district/state and the last few turns of the
    conversation are appended when available.
    """

    if chat_type == "budget":
        prompt = BUDGET_BRO_SYSTEM_PROMPT
    else:
        prompt = WATER_ASSISTANT_SYSTEM_PROMPT

    if profile:

        if profile.get("state") and profile.get("district"):
            location = f"{profile['district']}, {profile['state']}"
        else:
            location = "India"

        prompt += (
            f"\n\nUser is from: {location}. "
            "Provide location-specific advice when relevant."
        )

    if history:

        recent = history[-CONVERSATION_MEMORY:]

        history_text = "\n".join(
            f"{'User' if msg.get('role') == 'user' else 'Assistant'}: {msg.get('content', '')}"
            for msg in recent
        )

        prompt += (
            f"\n\nRecent conversation context:\n{history_text}"
            "\n\nNow respond to the current message:"
        )

    return prompt


def build_database_context(search_results: Dict[str, List[Dict]], location_data: List[Dict]) -> str:
    """Render knowledge-base hits as the numbered context block the model reads."""

    lines = ["RELEVANT INFORMATION FROM DATABASE:", ""]

    if search_results.get("knowledge"):

        lines.append("KNOWLEDGE BASE:")

        for i, item in enumerate(search_results["knowledge"], 1):
            lines.append(f"{i}. {item.get('title')}: {item.get('content')}")
            lines.append(f"   Source: {item.get('source_document')}")
            lines.append("")

    if search_results.get("schemes"):

        lines.append("RELEVANT GOVERNMENT SCHEMES:")

        for i, scheme in enumerate(search_results["schemes"], 1):
            lines.append(f"{i}. {scheme.get('scheme_name')} ({scheme.get('ministry')})")
            lines.append(f"   Description: {scheme.get('description')}")
            lines.append(
                "   Eligibility: "
                f"{scheme.get('eligibility_criteria') or 'Check with local authorities'}"
            )
            if scheme.get("budget_allocation"):
                lines.append(f"   Budget: ₹{scheme['budget_allocation']} crore")
            lines.append(
                "   Application: "
                f"{scheme.get('application_process') or 'Contact local agriculture department'}"
            )
            lines.append("")

    if search_results.get("tips"):

        lines.append("CONSERVATION RECOMMENDATIONS:")

        for i, tip in enumerate(search_results["tips"], 1):
            steps = ", ".join(tip.get("implementation_steps") or [])
            lines.append(f"{i}. {tip.get('title')}: {tip.get('description')}")
            lines.append(
                f"   Difficulty: {tip.get('difficulty_level')}, Cost: {tip.get('cost_range')}"
            )
            lines.append(f"   Steps: {steps}")
            lines.append("")

    if location_data:

        lines.append("LOCATION-SPECIFIC DATA:")

        for i, data in enumerate(location_data, 1):
            lines.append(
                f"{i}. {data.get('location_name')} - {data.get('metric_name')}: "
                f"{data.get('metric_value')}{data.get('metric_unit') or ''}"
            )
            lines.append(
                f"   Status: {data.get('status_category')}, Year: {data.get('assessment_year')}"
            )
            if data.get("recommendations"):
                lines.append(f"   Recommendations: {data['recommendations']}")
            lines.append(f"   Source: {data.get('data_source')}")
            lines.append("")

    return "\n".join(lines)


def build_knowledge_prompt(message: str, context: Optional[str]) -> str:
    """
    Full prompt for the knowledge-grounded chat.

    With a database context the model is told to treat it as primary
    source; without one it is told to answer from general knowledge.
    """

    if context:
        return (
            f"{KNOWLEDGE_SYSTEM_PROMPT}\n\n{DATABASE_PRIORITY_NOTE}"
            f"\n\nCONTEXT FROM DATABASE:\n{context}"
            f"\n\nUSER QUESTION: {message}"
        )

    return (
        f"{KNOWLEDGE_SYSTEM_PROMPT}\n\n{GENERAL_KNOWLEDGE_NOTE}"
        f"\n\nUSER QUESTION: {message}"
    )
