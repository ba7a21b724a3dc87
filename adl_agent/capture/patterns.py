"""
ADL Command Vocabulary

Markers, keywords and field keys shared by the recognizer, the decision
extractor and the field parser. All matching is case-insensitive.
"""

import re
from typing import Tuple


COMMAND_MARKER = "@adl"
COMMAND_KEYWORD = "adl"

# Keys that can carry session defaults
CONFIG_KEYS: Tuple[str, ...] = ("author", "factsheets", "meeting", "status")

# Keys that can appear inline with a decision
FIELD_KEYS: Tuple[str, ...] = ("title",) + CONFIG_KEYS

KEYWORD_RE = re.compile(r'\badl\b', re.IGNORECASE)
TERMINATOR_RE = re.compile(r'\bend\s+adl\b', re.IGNORECASE)

# @adl immediately followed by [, { or ( (whitespace allowed in between)
OPENING_DELIMITER_RE = re.compile(r'@adl\s*[\[\{\(]', re.IGNORECASE)

CONFIG_KEY_RE = re.compile(
    r'\b(?:' + '|'.join(CONFIG_KEYS) + r')\s*:',
    re.IGNORECASE,
)
FIELD_KEY_RE = re.compile(
    r'\b(?:' + '|'.join(FIELD_KEYS) + r')\s*:',
    re.IGNORECASE,
)
