"""
Base Handler

Abstract base class for chat front-end handlers.
Converts source-specific events to a common Message format.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class Message:
    """
    Common message format for all chat surfaces.

    `conversation_id` keys the per-conversation session state, so every
    handler must fill it consistently for messages of the same chat.
    """
    text: str
    user: str
    conversation_id: str
    source: str  # "teams", "slack"
    timestamp: str = ""
    user_name: Optional[str] = None
    is_bot: bool = False
    raw_data: Optional[Dict[str, Any]] = None

    @property
    def is_valid(self) -> bool:
        """Check if message has minimum required fields"""
        return bool(self.text and self.text.strip() and self.conversation_id)


class BaseHandler(ABC):
    """
    Abstract base class for source handlers.

    Each handler must implement:
    - parse_event: Convert raw event to Message
    - verify_signature: Verify webhook signature (if applicable)
    """

    def __init__(self, source_name: str):
        self.source_name = source_name

    @abstractmethod
    def parse_event(self, raw_data: Dict[str, Any]) -> Optional[Message]:
        """
        Parse raw event data into a Message.

        Returns:
            Message object or None if event should be ignored
        """
        pass

    @abstractmethod
    def verify_signature(
        self,
        body: bytes,
        signature: str,
        timestamp: str
    ) -> bool:
        """Verify the webhook signature"""
        pass

    def should_process(self, message: Message) -> bool:
        """
        Check if message should be processed.

        Short messages are kept: "END ADL" alone is a valid capture turn.
        """
        if not message.is_valid:
            return False

        if message.is_bot:
            return False

        return True
