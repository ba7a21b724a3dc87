"""
Capture State Machine

Tracks a decision spoken across several transcript segments:

    Idle --[capture opened, nothing extractable yet]--> Capturing
    Capturing --[turn without 'end adl']--> Capturing (buffer += ' ' + turn)
    Capturing --[turn with 'end adl']--> Idle (extract from the whole buffer)

Every function takes the caller's CaptureState and returns a new one.
A failed extraction at the terminator still returns to Idle.
"""

from dataclasses import dataclass
from typing import Optional

from ..common.schemas import CaptureState
from .extractor import extract_decision
from .recognizer import has_terminator, is_capturing


@dataclass(frozen=True)
class CaptureTransition:
    """Result of feeding one turn to the capture state machine"""
    state: CaptureState
    started: bool = False
    completed: bool = False
    captured_text: Optional[str] = None  # full buffer, set when completed
    decision: Optional[str] = None


def reset() -> CaptureState:
    return CaptureState(active=False, buffer="")


def start_capture(text: str) -> CaptureState:
    return CaptureState(active=True, buffer=text.strip())


def advance(state: Optional[CaptureState], text: Optional[str]) -> CaptureTransition:
    """
    Feed one turn to the state machine.

    Args:
        state: Current capture state (None is treated as Idle)
        text: The new turn's text

    Returns:
        CaptureTransition holding the next state and, when the terminator
        was seen, the accumulated text and the extracted decision (if any)
    """
    state = state or reset()
    text = (text or "").strip()

    if not state.active:
        if is_capturing(text) and extract_decision(text) is None:
            return CaptureTransition(state=start_capture(text), started=True)
        return CaptureTransition(state=state)

    buffer = f"{state.buffer} {text}" if text else state.buffer

    if has_terminator(text):
        return CaptureTransition(
            state=reset(),
            completed=True,
            captured_text=buffer,
            decision=extract_decision(buffer),
        )

    return CaptureTransition(state=CaptureState(active=True, buffer=buffer))
