"""
Delete Conversation Command.

Idempotent: deleting an id that no longer exists is a successful no-op, so a
second delete (or a delete racing another tab) reports success too. Messages
go with the conversation through the store's cascade.
"""

import logging
from dataclasses import dataclass

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.domain.exceptions import AccessDeniedError
from productboards.domain.ports.repositories import ConversationRepository
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteConversationCommand(Command[bool]):
    conversation_id: ConversationId
    user_id: UserId


class DeleteConversationHandler(CommandHandler[bool]):
    def __init__(self, conversation_repository: ConversationRepository):
        self._conversation_repository = conversation_repository

    async def execute(self, command: DeleteConversationCommand) -> bool:
        """Returns True when a row was removed, False when it was already gone."""
        conversation_id = command.conversation_id

        conversation = await self._conversation_repository.get_by_id(conversation_id)
        if not conversation:
            logger.info(f"Conversation {conversation_id.value} already deleted")
            return False

        if not conversation.is_owned_by(command.user_id):
            raise AccessDeniedError("User does not own this conversation.")

        return await self._conversation_repository.delete(conversation_id)
