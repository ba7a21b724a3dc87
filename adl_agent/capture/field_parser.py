"""
Field Parser

Extracts optional key:"value" fields from anywhere in a message:
title, author, factsheets, meeting and status. Values may use single or
double quotes. A token with unmatched quotes simply does not match.
"""

import re
from typing import Dict, List, Optional, Pattern

from ..common.schemas import ConfigFields, EntryFields


def _field_pattern(key: str) -> Pattern:
    return re.compile(
        r'\b' + key + r'\s*:\s*(?:"([^"]*)"|\'([^\']*)\')',
        re.IGNORECASE,
    )


FIELD_PATTERNS: Dict[str, Pattern] = {
    "title": _field_pattern("title"),
    "author": _field_pattern("author"),
    "fact_sheets": _field_pattern("factsheets"),
    "meeting": _field_pattern("meeting"),
    "status": _field_pattern("status"),
}

CONFIG_FIELDS = ("author", "fact_sheets", "meeting", "status")


def split_fact_sheets(value: str) -> List[str]:
    """Split a comma-separated fact sheet list, keeping order and duplicates"""
    return [piece.strip() for piece in value.split(',') if piece.strip()]


def _match_value(pattern: Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1) if match.group(1) is not None else match.group(2)
    value = value.strip()
    return value or None


def _scan(text: Optional[str], names) -> Dict[str, object]:
    found: Dict[str, object] = {}
    if not text:
        return found

    for name in names:
        value = _match_value(FIELD_PATTERNS[name], text)
        if value is None:
            continue
        if name == "fact_sheets":
            sheets = split_fact_sheets(value)
            if sheets:
                found[name] = sheets
        else:
            found[name] = value

    return found


def extract_fields(text: Optional[str]) -> EntryFields:
    """
    Scan the whole text for inline fields.

    Each field is matched independently, so token order does not matter.
    Fields that are absent (or empty) stay None.
    """
    return EntryFields(**_scan(text, FIELD_PATTERNS.keys()))


def parse_config(text: Optional[str]) -> ConfigFields:
    """Parse the session-default fields of a config command"""
    return ConfigFields(**_scan(text, CONFIG_FIELDS))
