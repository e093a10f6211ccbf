"""
SendMessage Command - the send pipeline.

Steps (strictly sequential, one await at a time):
1. Validate input and pass the ownership gate (no store write on failure)
2. Persist the user message                  → StoreError is terminal
3. Touch conversation.updated_at             → best-effort
4. Re-fetch the full ordered transcript
5. Call the AI with role+content pairs       → AiUnavailableError is terminal
6. Persist the assistant message             → StoreError, user message stays
7. First exchange: title from user content   → best-effort
8. Return the persisted user message

The assistant turn is not returned: every viewer, the sender included,
receives it from the insert feed.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.ai_calls import call_ai
from productboards.application.services.authorization import OwnershipGuard
from productboards.application.services.message_store import MessageStore
from productboards.config.settings import Config
from productboards.domain.entities.message import Message
from productboards.domain.exceptions import DomainValidationError
from productboards.domain.ports.ai_assistant import AiAssistant, ChatReply
from productboards.domain.ports.repositories import ConversationRepository
from productboards.domain.services.transcript import (
    build_transcript,
    derive_title,
    is_first_exchange,
)
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.user_id import UserId
from productboards.observability.metrics import (
    MetricsErrorType,
    decrement_active_sends,
    increment_active_sends,
    increment_error,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendMessageCommand(Command[Message]):
    conversation_id: Optional[ConversationId]
    user_id: UserId
    content: str
    image_ref: Optional[str] = None
    ai_timeout: float = Config.AI_TIMEOUT_SECONDS


class SendMessageHandler(CommandHandler[Message]):
    def __init__(
        self,
        guard: OwnershipGuard,
        conv_repo: ConversationRepository,
        message_store: MessageStore,
        assistant: AiAssistant,
    ):
        self.guard = guard
        self.conv_repo = conv_repo
        self.message_store = message_store
        self.assistant = assistant

    async def execute(self, command: SendMessageCommand) -> Message:
        if command.conversation_id is None:
            raise DomainValidationError("conversation_id is required")
        content = (command.content or "").strip()
        if not content:
            raise DomainValidationError("Message content cannot be empty")

        await self.guard.conversation(command.conversation_id, command.user_id)

        increment_active_sends()
        try:
            return await self._run(command.conversation_id, content, command)
        finally:
            decrement_active_sends()

    async def _run(
        self, conversation_id: ConversationId, content: str, command: SendMessageCommand
    ) -> Message:
        metadata = {"image_ref": command.image_ref} if command.image_ref else {}
        user_message = Message.create(
            conversation_id=conversation_id,
            role="user",
            content=content,
            metadata=metadata,
        )
        await self.message_store.append(user_message)

        await self._best_effort(
            "touch conversation",
            self.conv_repo.touch(conversation_id, user_message.created_at),
        )

        history = await self.message_store.history(conversation_id)
        transcript = build_transcript(history, command.image_ref)

        reply = await self._ask_assistant(conversation_id, transcript, command.ai_timeout)

        assistant_message = Message.create(
            conversation_id=conversation_id,
            role="assistant",
            content=reply.content,
            metadata=reply.metadata,
        )
        await self.message_store.append(assistant_message)

        if is_first_exchange(history):
            await self._best_effort(
                "set conversation title",
                self.conv_repo.set_title(conversation_id, derive_title(content)),
            )

        return user_message

    async def _ask_assistant(
        self, conversation_id: ConversationId, transcript: list[dict], timeout: float
    ) -> ChatReply:
        started = time.monotonic()
        reply = await call_ai(
            self.assistant.reply(transcript), timeout, operation="chat reply"
        )
        logger.info(
            f"AI reply for conversation {conversation_id.value} "
            f"({len(transcript)} turns, {time.monotonic() - started:.2f}s)"
        )
        return reply

    async def _best_effort(self, step: str, operation) -> None:
        try:
            await operation
        except Exception as e:
            increment_error(MetricsErrorType.BEST_EFFORT_STEP_FAILED)
            logger.warning(f"Send pipeline step '{step}' failed: {e}")
