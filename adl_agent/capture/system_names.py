"""
System-Name Tagger

Derives candidate fact sheet tags from a decision: acronyms (OTCAS) and
capitalized or CamelCase names (Kubernetes, LeanIX). Only used when no
explicit fact sheets were supplied.
"""

import re
from typing import List, Optional


# A capital followed by more capitals or by lowercase letters, then any
# number of CamelCase humps
SYSTEM_NAME_RE = re.compile(r'\b[A-Z](?:[A-Z]+|[a-z]+)(?:[A-Z][a-z]*)*\b')

STOPWORDS = frozenset({
    "We", "The", "This", "That", "Our", "All", "For", "And", "But", "Or",
})


def extract_system_names(decision: Optional[str]) -> List[str]:
    """
    Collect system/application names in first-seen order.

    Example:
        >>> extract_system_names("We use LeanIX and OTCAS")
        ['LeanIX', 'OTCAS']
    """
    if not decision:
        return []

    seen = set()
    names = []
    for match in SYSTEM_NAME_RE.finditer(decision):
        name = match.group(0)
        if name in STOPWORDS or name in seen:
            continue
        seen.add(name)
        names.append(name)

    return names
