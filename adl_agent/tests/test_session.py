"""
Tests for Session Store
"""

import pytest


class TestSessionStore:

    def test_fresh_state(self):
        from adl_agent.capture.session import SessionStore

        state = SessionStore().get("conv-1")

        assert state.message_count == 0
        assert state.capture.active is False
        assert state.config.is_empty is True

    def test_get_returns_copy(self):
        from adl_agent.capture.session import SessionStore

        store = SessionStore()
        state = store.get("conv-1")
        state.message_count = 3
        store.save("conv-1", state)

        copy = store.get("conv-1")
        copy.message_count = 99

        assert store.get("conv-1").message_count == 3

    def test_oldest_conversation_evicted(self):
        from adl_agent.capture.session import SessionStore
        from adl_agent.common.schemas import ConversationState

        store = SessionStore(max_conversations=2)
        for conversation_id in ("conv-1", "conv-2", "conv-3"):
            store.save(conversation_id, ConversationState(message_count=1))

        assert len(store) == 2
        assert store.get("conv-1").message_count == 0
        assert store.get("conv-3").message_count == 1

    def test_recent_activity_keeps_conversation(self):
        from adl_agent.capture.session import SessionStore
        from adl_agent.common.schemas import ConversationState

        store = SessionStore(max_conversations=2)
        store.save("conv-1", ConversationState(message_count=1))
        store.save("conv-2", ConversationState(message_count=1))
        store.save("conv-1", ConversationState(message_count=2))
        store.save("conv-3", ConversationState(message_count=1))

        assert store.get("conv-1").message_count == 2
        assert store.get("conv-2").message_count == 0

    def test_lock_per_conversation(self):
        from adl_agent.capture.session import SessionStore

        store = SessionStore()

        assert store.lock("conv-1") is store.lock("conv-1")
        assert store.lock("conv-1") is not store.lock("conv-2")

    @pytest.mark.asyncio
    async def test_held_lock_survives_eviction(self):
        from adl_agent.capture.session import SessionStore
        from adl_agent.common.schemas import ConversationState

        store = SessionStore(max_conversations=1)
        lock = store.lock("conv-1")
        store.save("conv-1", ConversationState())

        async with lock:
            store.save("conv-2", ConversationState())
            assert store.lock("conv-1") is lock

        store.save("conv-1", ConversationState())
        store.save("conv-3", ConversationState())
        assert store.lock("conv-1") is not lock
