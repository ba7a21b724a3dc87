"""
Decision Record Schema

Core principle: a record only exists when a decision payload was found.
Every other field is optional at extraction time and resolved later by the host.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


TITLE_MAX_LENGTH = 60
ELLIPSIS = "..."


# ============================================================================
# Enums
# ============================================================================

class DecisionCommand(str, Enum):
    """Classification of an incoming message"""
    LOG_DECISION = "log_decision"
    CONFIGURE = "configure"
    CONTINUE_CAPTURE = "continue_capture"
    PLAIN = "plain"


# ============================================================================
# Helpers
# ============================================================================

def truncate_title(text: str, limit: int = TITLE_MAX_LENGTH) -> str:
    """Bound a title to `limit` characters, ending with an ellipsis when cut"""
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[:limit - len(ELLIPSIS)].rstrip() + ELLIPSIS


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


# ============================================================================
# Field sets
# ============================================================================

class ConfigFields(BaseModel):
    """
    Session-level defaults a conversation can set with a config command.

    Created empty at conversation start and merged shallowly: a non-empty
    value in a patch overwrites the previous one, nothing is ever cleared.
    """
    model_config = ConfigDict(populate_by_name=True)

    author: Optional[str] = None
    fact_sheets: Optional[List[str]] = Field(default=None, alias="factSheets")
    meeting: Optional[str] = None
    status: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not any((self.author, self.fact_sheets, self.meeting, self.status))

    def merge(self, patch: "ConfigFields") -> "ConfigFields":
        """Return a new ConfigFields with the non-empty values of `patch` applied"""
        update = {
            name: value
            for name, value in patch.model_dump(exclude_none=True).items()
            if value and name in type(self).model_fields
        }
        return self.model_copy(update=update)


class EntryFields(ConfigFields):
    """Optional fields found inline in a decision message"""
    title: Optional[str] = None


# ============================================================================
# Main Schema
# ============================================================================

class DecisionRecord(BaseModel):
    """
    Structured output of decision extraction.

    `decision` is never empty and `title` is always bounded to
    TITLE_MAX_LENGTH characters.
    """
    model_config = ConfigDict(populate_by_name=True)

    decision: str = Field(..., min_length=1, description="The free-text decision statement")
    title: str = Field(..., min_length=1, description="Short title, explicit or synthesized")
    author: Optional[str] = None
    fact_sheets: Optional[List[str]] = Field(default=None, alias="factSheets")
    meeting: Optional[str] = None
    status: Optional[str] = None

    @field_validator("decision", mode="before")
    @classmethod
    def _strip_decision(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("title")
    @classmethod
    def _bound_title(cls, value: str) -> str:
        return truncate_title(value)

    @field_validator("author", "meeting", "status")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return _clean_optional(value)

    def to_tool_arguments(self) -> Dict[str, Any]:
        """
        Format the record as arguments for the ADL `adl_create` tool.

        The service contract is {title, decision, author, factSheets, status};
        fields that are still unresolved are left out.
        """
        arguments = self.model_dump(
            by_alias=True,
            exclude_none=True,
            include={"title", "decision", "author", "fact_sheets", "status"},
        )
        return arguments
