"""
Decision Agent

Drives one conversation turn through the capture pipeline:

1. Classify the message (log / configure / continue capture / plain)
2. Extract a record, update session defaults, or advance the capture
3. Complete the record with session and host defaults
4. Submit it to the ADL service and report back

Returns reply texts; sending them is up to the front end.
"""

import logging
from typing import List, Optional

from ..common.adl_client import ADLClient, ADLClientError
from ..common.schemas import ConversationState, DecisionCommand, DecisionRecord
from . import replies
from .capture_state import advance, reset
from .field_parser import parse_config
from .record_builder import RecordBuilder
from .recognizer import classify
from .session import SessionStore

logger = logging.getLogger("adl.agent")


class DecisionAgent:
    """
    Conversation turn handler for ADL decision capture.

    Session state lives in the SessionStore; the extraction functions it
    calls are pure.
    """

    def __init__(
        self,
        client: Optional[ADLClient] = None,
        builder: Optional[RecordBuilder] = None,
        sessions: Optional[SessionStore] = None,
    ):
        self._client = client
        self._builder = builder or RecordBuilder()
        self._sessions = sessions or SessionStore()

    @property
    def sessions(self) -> SessionStore:
        return self._sessions

    def welcome_message(self) -> str:
        return replies.render_welcome()

    async def handle_message(self, conversation_id: str, text: Optional[str]) -> List[str]:
        """
        Handle one incoming message.

        Args:
            conversation_id: Conversation the message belongs to
            text: Message body or transcript segment

        Returns:
            Reply texts, in order
        """
        text = (text or "").strip()

        async with self._sessions.lock(conversation_id):
            state = self._sessions.get(conversation_id)
            state.message_count += 1

            command = classify(text, state.capture)
            logger.debug("Conversation %s turn %d: %s", conversation_id, state.message_count, command.value)

            if command == DecisionCommand.CONFIGURE:
                out = self._configure(state, text)
            elif command == DecisionCommand.LOG_DECISION:
                out = await self._log_decision(state, text)
            elif command == DecisionCommand.CONTINUE_CAPTURE:
                out = await self._continue_capture(state, text)
            else:
                out = [replies.render_echo(text)]

            self._sessions.save(conversation_id, state)
            return out

    def _configure(self, state: ConversationState, text: str) -> List[str]:
        patch = parse_config(text)
        if patch.is_empty:
            return [replies.CONFIG_HELP]

        state.config = state.config.merge(patch)
        logger.info("Session defaults updated: %s", patch.model_dump(exclude_none=True))
        return [replies.render_config_updated(state.config)]

    async def _log_decision(self, state: ConversationState, text: str) -> List[str]:
        record = self._builder.build(text, state.config)
        if record is not None:
            state.capture = reset()
            return await self._process(record)

        transition = advance(reset(), text)
        if transition.started:
            state.capture = transition.state
            logger.info("Started multi-turn capture")
            return [replies.CAPTURING]

        return [replies.NOT_EXTRACTED]

    async def _continue_capture(self, state: ConversationState, text: str) -> List[str]:
        transition = advance(state.capture, text)
        state.capture = transition.state

        if not transition.completed:
            return []

        if not transition.decision:
            logger.info("Capture ended without an extractable decision")
            return [replies.CAPTURE_FAILED]

        record = self._builder.build(transition.captured_text, state.config)
        return await self._process(record)

    async def _process(self, record: DecisionRecord) -> List[str]:
        out = [replies.render_processing(record)]

        if self._client is None or not self._client.is_connected:
            logger.warning("ADL-MCP server not connected; decision not submitted")
            out.append(replies.render_not_connected(record))
            return out

        try:
            result = await self._client.create_entry(record)
        except ADLClientError as e:
            logger.error("Error creating ADL entry: %s", e)
            out.append(replies.render_failure(str(e)))
            return out

        out.append(replies.render_success(record, result.entry_id))
        return out
