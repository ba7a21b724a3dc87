"""
Title Synthesizer

Derives a short imperative title from a decision statement:
"We decided to adopt Kubernetes for deployment" -> "Adopt Kubernetes for deployment".

Best effort only: the result is deterministic and at most TITLE_MAX_LENGTH
characters, not linguistically perfect.
"""

import re
from typing import List, Match, Optional, Pattern, Tuple

from ..common.schemas import TITLE_MAX_LENGTH, truncate_title


UNTITLED = "Untitled Decision"

# Sentence end for the object/context groups
_END = r'(?=[.!?]|$)'
_FOR_CONTEXT = r'(?:\s+for\s+(?P<context>.+?))?'

# Verb/object templates, tried in order
TITLE_TEMPLATES: Tuple[Pattern, ...] = (
    # "we decided to use X [for Y]"
    re.compile(
        r'\bwe\s+(?:have\s+)?decided\s+to\s+(?P<verb>\w+)\s+(?P<object>.+?)' + _FOR_CONTEXT + _END,
        re.IGNORECASE,
    ),
    # "we will implement X [for Y]"
    re.compile(
        r'\bwe\s+(?:will|shall|are\s+going\s+to|plan\s+to|agreed\s+to)\s+'
        r'(?P<verb>\w+)\s+(?P<object>.+?)' + _FOR_CONTEXT + _END,
        re.IGNORECASE,
    ),
    # "using X for Y"
    re.compile(
        r'\b(?P<verb>using|use)\s+(?P<object>.+?)\s+for\s+(?P<context>.+?)' + _END,
        re.IGNORECASE,
    ),
    # "decision to adopt X [for Y]"
    re.compile(
        r'\bdecision\s+(?:is\s+)?to\s+(?P<verb>\w+)\s+(?P<object>.+?)' + _FOR_CONTEXT + _END,
        re.IGNORECASE,
    ),
)

FILLER_PREFIX_RE = re.compile(
    r'^(?:'
    r'we\s+have\s+decided\s+to|we\s+decided\s+to|we\s+agreed\s+to|we\s+will|'
    r'the\s+decision\s+is\s+to|decision\s+is\s+to|final\s+decision\s*:|'
    r'decision\s*:|decided\s*:'
    r')\s*',
    re.IGNORECASE,
)

_SENTENCE_END_RE = re.compile(r'[.!?]')
_WHITESPACE_RE = re.compile(r'\s+')

# Templates only read this far into a sentence
_TEMPLATE_WINDOW = 4 * TITLE_MAX_LENGTH


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _search_sentences(template: Pattern, sentences: List[str]) -> Optional[Match]:
    for sentence in sentences:
        match = template.search(sentence)
        if match:
            return match
    return None


def _from_template(text: str) -> Optional[str]:
    # Each template sees one sentence at a time, capped to a window
    sentences = [s[:_TEMPLATE_WINDOW] for s in _SENTENCE_END_RE.split(text) if s.strip()]

    for template in TITLE_TEMPLATES:
        match = _search_sentences(template, sentences)
        if not match:
            continue

        title = f"{_capitalize_first(match.group('verb'))} {match.group('object').strip()}"
        context = match.group('context')
        if context and context.strip():
            title += f" for {context.strip()}"
        return title

    return None


def _from_first_sentence(text: str) -> str:
    stripped = FILLER_PREFIX_RE.sub('', text, count=1)
    sentence = _SENTENCE_END_RE.split(stripped, maxsplit=1)[0].strip()
    return sentence or stripped.strip(' .!?')


def generate_title(decision: Optional[str]) -> str:
    """
    Synthesize a title for a decision.

    Args:
        decision: Decision text (may be None or blank)

    Returns:
        Non-empty title of at most TITLE_MAX_LENGTH characters
    """
    if not decision or not decision.strip():
        return UNTITLED

    text = _WHITESPACE_RE.sub(' ', decision).strip()

    title = _from_template(text) or _from_first_sentence(text)
    title = truncate_title(title, TITLE_MAX_LENGTH)
    if not title:
        return UNTITLED

    return _capitalize_first(title)
