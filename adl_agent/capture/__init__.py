"""
Decision Capture - ADL Command Processing

Turns chat messages and speech transcripts into decision records.

Key Components:
- Recognizer: classifies messages (log / configure / continue capture / plain)
- Extractor: ordered delimiter chain locating the decision payload
- Field parser: inline key:"value" fields
- System-name tagger and title synthesizer: heuristic fallbacks
- Capture state machine: multi-turn "ADL ... END ADL" speech capture
- DecisionAgent: conversation turn handler wiring it all to the ADL service

Rules:
1. No decision payload, no record
2. Titles are always present and at most 60 characters
3. Session state is passed in and returned, never kept by the core
4. Defaults come from the host configuration, never from the core
"""

from .recognizer import classify, is_command, is_config_command, is_capturing, has_terminator
from .extractor import extract_decision, find_decision, DecisionMatch, DECISION_PATTERNS
from .field_parser import extract_fields, parse_config
from .system_names import extract_system_names
from .title import generate_title
from .capture_state import advance, start_capture, CaptureTransition
from .record_builder import extract_entry, RecordBuilder, RecordDefaults
from .session import SessionStore
from .agent import DecisionAgent

__all__ = [
    "classify",
    "is_command",
    "is_config_command",
    "is_capturing",
    "has_terminator",
    "extract_decision",
    "find_decision",
    "DecisionMatch",
    "DECISION_PATTERNS",
    "extract_fields",
    "parse_config",
    "extract_system_names",
    "generate_title",
    "advance",
    "start_capture",
    "CaptureTransition",
    "extract_entry",
    "RecordBuilder",
    "RecordDefaults",
    "SessionStore",
    "DecisionAgent",
]
