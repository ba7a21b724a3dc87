"""
Teams Handler

Handles Bot Framework activities (Microsoft Teams, Web Chat, Emulator).
"""

import re
from typing import Optional, Dict, Any, List

from .base import BaseHandler, Message

# <at>ADL</at> mention markup Teams inserts into the message text
_AT_MENTION_RE = re.compile(r'<at>(.*?)</at>', re.IGNORECASE)


class TeamsHandler(BaseHandler):
    """
    Handler for Bot Framework activities.

    Processes:
    - message activities
    - conversationUpdate activities with membersAdded (welcome)

    Ignores everything else (typing, reactions, ...).
    """

    def __init__(self, bot_id: str = ""):
        """
        Initialize Teams handler.

        Args:
            bot_id: The bot's channel account id, used to skip its own
                join events and messages
        """
        super().__init__("teams")
        self._bot_id = bot_id

    def parse_event(self, raw_data: Dict[str, Any]) -> Optional[Message]:
        """Parse a message activity into a Message"""
        if raw_data.get("type") != "message":
            return None

        sender = raw_data.get("from") or {}
        conversation = raw_data.get("conversation") or {}

        return Message(
            text=self._normalize_mentions(raw_data.get("text") or ""),
            user=sender.get("id", ""),
            user_name=sender.get("name"),
            conversation_id=conversation.get("id", ""),
            source="teams",
            timestamp=raw_data.get("timestamp", ""),
            is_bot=self._is_bot(sender),
            raw_data=raw_data,
        )

    def members_added(self, raw_data: Dict[str, Any]) -> List[str]:
        """Return ids of human members added by a conversationUpdate activity"""
        if raw_data.get("type") != "conversationUpdate":
            return []

        recipient_id = (raw_data.get("recipient") or {}).get("id", "")
        added = raw_data.get("membersAdded") or []
        return [
            member.get("id", "")
            for member in added
            if member.get("id") and member.get("id") not in (recipient_id, self._bot_id)
        ]

    def verify_signature(self, body: bytes, signature: str, timestamp: str) -> bool:
        # Bot Framework authenticates with JWT bearer tokens, validated upstream
        return True

    def _is_bot(self, sender: Dict[str, Any]) -> bool:
        if sender.get("role") == "bot":
            return True
        return bool(self._bot_id) and sender.get("id") == self._bot_id

    def _normalize_mentions(self, text: str) -> str:
        """Turn '<at>ADL</at>' into '@ADL' so the recognizer sees the marker"""
        return _AT_MENTION_RE.sub(lambda m: "@" + m.group(1).strip(), text).strip()
