"""
Conversation State Schema

Per-conversation state owned by the host session store. The extraction
core receives these values and returns new ones; it never keeps them.
"""

from pydantic import BaseModel, Field

from .decision_record import ConfigFields


class CaptureState(BaseModel):
    """Multi-turn speech capture: idle when `active` is False"""
    active: bool = False
    buffer: str = ""


class ConversationState(BaseModel):
    """Everything the host remembers about one conversation"""
    capture: CaptureState = Field(default_factory=CaptureState)
    config: ConfigFields = Field(default_factory=ConfigFields)
    message_count: int = 0
