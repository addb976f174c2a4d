import json
import logging
import os
import time
from typing import Dict, List, Optional

import config

logger = logging.getLogger(__name__)

VALID_ROLES = ("user", "system", "assistant")


class ConversationLog:
    """JSON file store for session conversations, one file per session"""

    def __init__(self, log_dir: Optional[str] = None):
        self.log_dir = log_dir or config.HITL_LOG_DIR
        logger.info("Conversation log initialized in %s", self.log_dir)

    def _get_session_path(self, session_id: str) -> str:
        return os.path.join(self.log_dir, f"session_{session_id}.json")

    def load(self, session_id: str) -> Optional[Dict]:
        """Load a session log, or None if the session has no log yet"""
        path = self._get_session_path(session_id)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def create(self, session_id: str) -> Dict:
        """Create an empty session log, replacing any existing one"""
        session_log = {"messages": []}
        self._write(session_id, session_log)
        logger.info("Created new conversation log for session %s", session_id)
        return session_log

    def add_message(self, session_id: str, role: str, content: str) -> Dict:
        """Append a message to the session log and persist it"""
        if role not in VALID_ROLES:
            raise ValueError(f"Invalid role '{role}', expected one of {VALID_ROLES}")

        session_log = self.load(session_id) or {"messages": []}
        session_log.setdefault("messages", []).append({
            "role": role,
            "content": content,
            "timestamp": time.time(),
        })
        self._write(session_id, session_log)

        logger.info("Adding message: session=%s, role=%s, length=%d chars", session_id, role, len(content))
        return session_log

    def get_messages(self, session_id: str) -> List[Dict]:
        session_log = self.load(session_id) or {}
        return list(session_log.get("messages", []))

    def _write(self, session_id: str, session_log: Dict) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        with open(self._get_session_path(session_id), "w", encoding="utf-8") as f:
            json.dump(session_log, f, ensure_ascii=False, indent=2)
