"""
Recipes for the human-in-the-loop example.

They are registered in ``hitl_cookbook`` rather than the process-wide
default so the example can be cooked next to other recipe sets. The chef's
pantry must supply ``sessionId`` and ``conversationLog`` (a ConversationLog).
"""

from typing import Any, Dict

import config
from core.abstractions import Recipe
from kitchen.cookbook import Cookbook, cookbook

hitl_cookbook = Cookbook()

RECENT_MESSAGES = 3


def _last_messages(history: Dict[str, Any], count: int) -> Dict[str, Any]:
    history = dict(history or {})
    history["messages"] = list(history.get("messages", []))[-count:]
    return history


@cookbook(book=hitl_cookbook)
class SystemDirective(Recipe):
    description = "The system directive for HITL interactions."
    priority = 20

    async def prepare(self) -> str:
        return "## OBJECTIVE: Assist the user to the best of your ability."


@cookbook(book=hitl_cookbook)
class ConversationHistory(Recipe):
    description = "The conversation history for HITL interactions."
    ingredients = ("sessionId", "conversationLog")

    priority = 20
    compressible = True
    summary_recipe = "ConversationHistorySummary"
    detail_profiles = {
        "recent": lambda history: _last_messages(history, RECENT_MESSAGES),
    }

    async def prepare(self, session_id, conversation_log) -> Dict[str, Any]:
        return conversation_log.load(session_id) or {"messages": []}


@cookbook(book=hitl_cookbook)
class ConversationHistorySummary(Recipe):
    description = "A summary of the conversation history for HITL interactions."
    ingredients = ("ConversationHistory",)

    priority = 20

    async def prepare(self, conversation_history) -> Dict[str, Any]:
        # Keep only the latest messages; nothing is sent to a model here.
        return _last_messages(conversation_history, config.HITL_SUMMARY_MESSAGES)
