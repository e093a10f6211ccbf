"""Create Conversation Command - explicit "new chat" action."""

from dataclasses import dataclass
from typing import Optional

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.domain.entities.conversation import Conversation
from productboards.domain.ports.repositories import ConversationRepository
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class CreateConversationCommand(Command[Conversation]):
    user_id: UserId
    title: Optional[str] = None


class CreateConversationHandler(CommandHandler[Conversation]):
    _conversation_repository: ConversationRepository

    def __init__(self, conversation_repository: ConversationRepository):
        self._conversation_repository = conversation_repository

    async def execute(self, command: CreateConversationCommand) -> Conversation:
        conversation = Conversation.create(owner=command.user_id, title=command.title)
        await self._conversation_repository.save(conversation)
        return conversation
