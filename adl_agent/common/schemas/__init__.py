"""
ADL Decision Schemas

Decision records, inline field sets and per-conversation state.
"""

from .decision_record import (
    DecisionRecord,
    DecisionCommand,
    ConfigFields,
    EntryFields,
    TITLE_MAX_LENGTH,
    truncate_title,
)
from .session_state import CaptureState, ConversationState

__all__ = [
    "DecisionRecord",
    "DecisionCommand",
    "ConfigFields",
    "EntryFields",
    "TITLE_MAX_LENGTH",
    "truncate_title",
    "CaptureState",
    "ConversationState",
]
