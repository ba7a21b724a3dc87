"""
Command Recognizer

Classifies incoming text as a decision-logging command, a configuration
command, a continuation of a multi-turn capture, or plain chat.

Bracket, brace and paren forms are unambiguous and are checked first
everywhere; the permissive keyword forms only apply when none of them is used.
"""

from typing import Optional

from ..common.schemas import CaptureState, DecisionCommand
from .patterns import (
    COMMAND_KEYWORD,
    COMMAND_MARKER,
    CONFIG_KEY_RE,
    FIELD_KEY_RE,
    KEYWORD_RE,
    OPENING_DELIMITER_RE,
    TERMINATOR_RE,
)


def _normalize(text: Optional[str]) -> str:
    if not text:
        return ""
    return text.strip().lower()


def is_command(text: Optional[str]) -> bool:
    """True if the text mentions @adl anywhere or starts with the adl keyword"""
    normalized = _normalize(text)
    if not normalized:
        return False
    return COMMAND_MARKER in normalized or normalized.startswith(COMMAND_KEYWORD)


def uses_delimiter_form(text: Optional[str]) -> bool:
    """True if @adl is directly followed by [, { or ("""
    if not text:
        return False
    return OPENING_DELIMITER_RE.search(text) is not None


def has_terminator(text: Optional[str]) -> bool:
    """True if the text contains the 'end adl' terminator"""
    if not text:
        return False
    return TERMINATOR_RE.search(text) is not None


def is_config_command(text: Optional[str]) -> bool:
    """
    Check if the message only sets session defaults.

    Requires the @adl marker without an opening delimiter, plus at least one
    of author:, factsheets:, meeting:, status:.
    """
    normalized = _normalize(text)
    if COMMAND_MARKER not in normalized:
        return False
    if uses_delimiter_form(normalized):
        return False
    return CONFIG_KEY_RE.search(normalized) is not None


def is_capturing(text: Optional[str]) -> bool:
    """Check if a speech capture is open in this text but not yet terminated"""
    if not text:
        return False
    return (
        KEYWORD_RE.search(text) is not None
        and not has_terminator(text)
        and not uses_delimiter_form(text)
    )


def _has_leading_payload(text: str) -> bool:
    """True if free text sits between @adl and the first field key"""
    start = text.lower().find(COMMAND_MARKER)
    if start < 0:
        return False
    rest = text[start + len(COMMAND_MARKER):]
    key = FIELD_KEY_RE.search(rest)
    if key:
        rest = rest[:key.start()]
    return bool(rest.strip())


def classify(text: Optional[str], capture: Optional[CaptureState] = None) -> DecisionCommand:
    """
    Classify a message for the conversation turn handler.

    A config-style message that also carries free text before its fields
    (`@adl We migrate author:"Jo"`) logs a decision; the fields ride along.
    """
    if not is_command(text):
        if capture is not None and capture.active:
            return DecisionCommand.CONTINUE_CAPTURE
        return DecisionCommand.PLAIN

    if is_config_command(text) and not _has_leading_payload(text):
        return DecisionCommand.CONFIGURE

    return DecisionCommand.LOG_DECISION
