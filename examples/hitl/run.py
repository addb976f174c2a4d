"""
Run the human-in-the-loop example.

Usage:
    python -m examples.hitl.run ["user message"] [session_id]

Appends the user message to the session log and prints the explained cook
result. No language model is called.
"""

import asyncio
import logging
import sys
from typing import Optional

import config
from kitchen.chef import Chef
from prompt.templates import format_plate_report
from .conversation_log import ConversationLog
from .recipes import hitl_cookbook

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Hello, can you help me with my project?"
DEFAULT_SESSION_ID = "1234"


async def cook_session(
    session_id: str,
    user_message: str,
    conversation_log: Optional[ConversationLog] = None,
    budget: Optional[int] = None,
):
    """
    Record a user message and cook the session context.

    Args:
        session_id: Conversation session identifier
        user_message: Message to append before cooking
        conversation_log: Log store (default: ConversationLog in config.HITL_LOG_DIR)
        budget: Token budget (default from config)

    Returns:
        Explained CookResult
    """
    conversation_log = conversation_log or ConversationLog()
    conversation_log.add_message(session_id, "user", user_message)

    chef = Chef({"sessionId": session_id, "conversationLog": conversation_log}, cookbook=hitl_cookbook)
    return await chef.cook(
        ["SystemDirective", "ConversationHistory"],
        budget=budget if budget is not None else config.HITL_BUDGET,
        explain=True,
    )


def main(argv=None) -> int:
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    )

    argv = sys.argv[1:] if argv is None else argv
    user_message = argv[0] if len(argv) > 0 else DEFAULT_MESSAGE
    session_id = argv[1] if len(argv) > 1 else DEFAULT_SESSION_ID

    result = asyncio.run(cook_session(session_id, user_message))

    print("[context]:")
    print(result.context)
    print(format_plate_report(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
