"""
Decision Extractor

Locates the decision payload of an ADL command using an ordered chain of
delimiter patterns. The first pattern that yields a non-empty payload wins.

Supported forms, in priority order:
1. Bracket: @ADL ['decision text'] / @ADL ["decision text"] / @ADL [text]
2. Curly:   @ADL {decision text}
3. Paren:   @ADL (decision text)
4. Speech:  ADL ... END ADL
5. Simple:  @ADL decision text [author:"..." ...]
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Tuple

from .patterns import FIELD_KEY_RE


_BRACKETS_ONLY_RE = re.compile(r'^[\[\]\{\}\(\)\s]+$')


@dataclass(frozen=True)
class DecisionMatch:
    """A decision payload and the form it was found in"""
    decision: str
    form: str


def _strip_quote_pair(payload: str) -> str:
    """Drop one pair of matching quotes around the whole payload"""
    payload = payload.strip()
    if len(payload) >= 2 and payload[0] == payload[-1] and payload[0] in "\"'":
        payload = payload[1:-1].strip()
    return payload


def _cut_at_field_key(payload: str) -> str:
    key = FIELD_KEY_RE.search(payload)
    if key:
        payload = payload[:key.start()]
    return payload.strip()


def _not_only_brackets(payload: str) -> bool:
    return _BRACKETS_ONLY_RE.match(payload) is None


@dataclass(frozen=True)
class DelimiterPattern:
    """
    One step of the extraction chain.

    `clean` normalizes the captured group; `accept` can reject a cleaned
    payload so the chain moves on to the next pattern.
    """
    form: str
    regex: Pattern
    clean: Callable[[str], str] = str.strip
    accept: Optional[Callable[[str], bool]] = None

    def extract(self, text: str) -> Optional[str]:
        match = self.regex.search(text)
        if not match or not match.group(1):
            return None

        payload = self.clean(match.group(1))
        if not payload:
            return None
        if self.accept is not None and not self.accept(payload):
            return None
        return payload


DECISION_PATTERNS: Tuple[DelimiterPattern, ...] = (
    DelimiterPattern(
        form="bracket",
        regex=re.compile(r'@adl\s*\[\s*(.+?)\s*\]', re.IGNORECASE),
        clean=_strip_quote_pair,
    ),
    DelimiterPattern(
        form="curly",
        regex=re.compile(r'@adl\s*\{(.+?)\}', re.IGNORECASE),
    ),
    DelimiterPattern(
        form="paren",
        regex=re.compile(r'@adl\s*\((.+?)\)', re.IGNORECASE),
    ),
    DelimiterPattern(
        form="speech",
        regex=re.compile(r'\badl\b\s+(.+?)\s+end\s+adl\b', re.IGNORECASE | re.DOTALL),
    ),
    DelimiterPattern(
        form="simple",
        regex=re.compile(r'@adl\s+(.+)', re.IGNORECASE | re.DOTALL),
        clean=_cut_at_field_key,
        accept=_not_only_brackets,
    ),
)


def find_decision(text: Optional[str]) -> Optional[DecisionMatch]:
    """
    Run the pattern chain against the trimmed text.

    Args:
        text: Raw message text (case is preserved in the result)

    Returns:
        DecisionMatch for the first pattern with a payload, or None
    """
    if not text:
        return None

    normalized = text.strip()
    for pattern in DECISION_PATTERNS:
        decision = pattern.extract(normalized)
        if decision:
            return DecisionMatch(decision=decision, form=pattern.form)

    return None


def extract_decision(text: Optional[str]) -> Optional[str]:
    """Extract the decision text, or None when no form matches"""
    match = find_decision(text)
    return match.decision if match else None
