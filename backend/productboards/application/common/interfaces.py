"""
Base interfaces for CQRS pattern.

Usage:
    @dataclass(frozen=True)
    class RenameConversationCommand(Command[Conversation]):
        conversation_id: ConversationId
        user_id: UserId
        title: str

    class RenameConversationHandler(CommandHandler[Conversation]):
        def __init__(self, guard: OwnershipGuard, repo: ConversationRepository):
            ...

        async def execute(self, cmd: RenameConversationCommand) -> Conversation:
            conversation = await self.guard.conversation(cmd.conversation_id, cmd.user_id)
            conversation.rename(cmd.title)
            await self.repo.save(conversation)
            return conversation
"""
from abc import ABC, abstractmethod
from typing import TypeVar, Generic

T = TypeVar("T")


class Command(ABC, Generic[T]):
    """Base class for write operations"""
    pass


class CommandHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, command: Command[T]) -> T:
        """Execute the command and return a result of type T"""
        ...


class Query(ABC, Generic[T]):
    """Base class for read operations"""
    pass


class QueryHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, query: Query[T]) -> T:
        """Execute the query and return a result of type T"""
        ...
