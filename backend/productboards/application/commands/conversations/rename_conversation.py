"""Rename Conversation Command."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.config.settings import Config
from productboards.domain.entities.conversation import Conversation
from productboards.domain.ports.repositories import ConversationRepository
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class RenameConversationCommand(Command[Conversation]):
    conversation_id: ConversationId
    user_id: UserId
    new_title: str


class RenameConversationHandler(CommandHandler[Conversation]):
    def __init__(
        self, guard: OwnershipGuard, conversation_repository: ConversationRepository
    ):
        self._guard = guard
        self._conversation_repository = conversation_repository

    async def execute(self, command: RenameConversationCommand) -> Conversation:
        conversation = await self._guard.conversation(
            command.conversation_id, command.user_id
        )
        conversation.rename(command.new_title, max_length=Config.TITLE_MAX_LENGTH)
        await self._conversation_repository.save(conversation)

        return conversation
