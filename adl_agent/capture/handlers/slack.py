"""
Slack Handler

Handles Slack Events API webhooks and converts them to Messages.
"""

import hmac
import hashlib
import re
import time
from typing import Optional, Dict, Any

from .base import BaseHandler, Message

# Slack mention of the bot user: <@U12345678>
_USER_MENTION_RE = re.compile(r'<@U[A-Z0-9]+>\s*')

SIGNATURE_MAX_AGE = 300


class SlackHandler(BaseHandler):
    """
    Handler for Slack Events API webhooks.

    Processes:
    - message events

    Ignores:
    - Bot messages
    - Channel join/leave/topic subtypes
    - Edits and deletions
    """

    IGNORED_SUBTYPES = (
        "bot_message", "channel_join", "channel_leave", "channel_topic",
        "channel_purpose", "channel_name", "message_changed", "message_deleted",
    )

    def __init__(self, signing_secret: str = ""):
        """
        Initialize Slack handler.

        Args:
            signing_secret: Slack signing secret for verification
        """
        super().__init__("slack")
        self._signing_secret = signing_secret

    def parse_event(self, raw_data: Dict[str, Any]) -> Optional[Message]:
        """Parse a Slack event callback into a Message"""
        if raw_data.get("type") != "event_callback":
            return None

        event = raw_data.get("event", {})
        if event.get("type") != "message":
            return None

        if event.get("bot_id") or event.get("subtype") in self.IGNORED_SUBTYPES:
            return None

        channel = event.get("channel", "")
        # One capture session per thread, or per channel outside threads
        thread = event.get("thread_ts")
        conversation_id = f"{channel}:{thread}" if thread else channel

        return Message(
            text=self._strip_user_mentions(event.get("text", "")),
            user=event.get("user", ""),
            conversation_id=conversation_id,
            source="slack",
            timestamp=event.get("ts", ""),
            is_bot=False,
            raw_data=event,
        )

    def _strip_user_mentions(self, text: str) -> str:
        return _USER_MENTION_RE.sub('', text).strip()

    def verify_signature(
        self,
        body: bytes,
        signature: str,
        timestamp: str
    ) -> bool:
        """
        Verify Slack request signature.

        Args:
            body: Raw request body
            signature: X-Slack-Signature header
            timestamp: X-Slack-Request-Timestamp header

        Returns:
            True if signature is valid
        """
        if not self._signing_secret:
            # Skip verification if no secret configured
            return True

        if not signature or not timestamp:
            return False

        # Check timestamp is recent (within 5 minutes)
        try:
            ts = int(timestamp)
            if abs(time.time() - ts) > SIGNATURE_MAX_AGE:
                return False
        except ValueError:
            return False

        # Signature covers the raw body bytes
        sig_basestring = f"v0:{timestamp}:".encode('utf-8') + body
        expected_sig = "v0=" + hmac.new(
            self._signing_secret.encode('utf-8'),
            sig_basestring,
            hashlib.sha256
        ).hexdigest()

        return hmac.compare_digest(expected_sig, signature)

    def is_url_verification(self, raw_data: Dict[str, Any]) -> bool:
        """Check if request is URL verification"""
        return raw_data.get("type") == "url_verification"

    def get_challenge(self, raw_data: Dict[str, Any]) -> Optional[str]:
        """Get challenge for URL verification"""
        if self.is_url_verification(raw_data):
            return raw_data.get("challenge")
        return None
