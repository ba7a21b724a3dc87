"""
Session Store

In-memory per-conversation state. Turns of one conversation must be
handled one at a time, so the store also hands out a lock per conversation.

The store keeps the most recently active conversations only; the oldest
ones are dropped once `max_conversations` is exceeded.
"""

import asyncio
from collections import OrderedDict
from typing import Dict

from ..common.schemas import ConversationState

DEFAULT_MAX_CONVERSATIONS = 1000


class SessionStore:
    """Keeps ConversationState values keyed by conversation id"""

    def __init__(self, max_conversations: int = DEFAULT_MAX_CONVERSATIONS):
        self._states: "OrderedDict[str, ConversationState]" = OrderedDict()
        self._locks: Dict[str, asyncio.Lock] = {}
        self._max_conversations = max(1, max_conversations)

    def __len__(self) -> int:
        return len(self._states)

    def get(self, conversation_id: str) -> ConversationState:
        """Return a copy of the stored state, or a fresh one"""
        state = self._states.get(conversation_id)
        if state is None:
            return ConversationState()
        return state.model_copy(deep=True)

    def save(self, conversation_id: str, state: ConversationState) -> None:
        self._states[conversation_id] = state
        self._states.move_to_end(conversation_id)
        self._evict()

    def lock(self, conversation_id: str) -> asyncio.Lock:
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[conversation_id] = lock
        return lock

    def _evict(self) -> None:
        while len(self._states) > self._max_conversations:
            conversation_id, _ = self._states.popitem(last=False)
            lock = self._locks.get(conversation_id)
            # A conversation mid-turn keeps its lock
            if lock is not None and not lock.locked():
                del self._locks[conversation_id]
