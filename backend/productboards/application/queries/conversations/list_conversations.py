"""List Conversations Query - the sidebar, grouped by recency."""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Optional

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.config.settings import Config
from productboards.domain.entities.conversation import Conversation
from productboards.domain.ports.repositories import ConversationRepository
from productboards.domain.services.recency import RecencyBucket, group_by_recency
from productboards.domain.value_objects.user_id import UserId


@dataclass
class ListConversationsResult:
    conversations: list[Conversation]
    groups: dict[RecencyBucket, list[Conversation]]


@dataclass(frozen=True)
class ListConversationsQuery(Query[ListConversationsResult]):
    user_id: UserId
    limit: int = Config.CONVERSATION_USER_LIMIT
    tz: Optional[tzinfo] = None
    now: Optional[datetime] = None


class ListConversationsHandler(QueryHandler[ListConversationsResult]):
    def __init__(self, conversation_repository: ConversationRepository):
        self._conversation_repository = conversation_repository

    async def execute(self, query: ListConversationsQuery) -> ListConversationsResult:
        conversations = await self._conversation_repository.get_by_owner(
            query.user_id, query.limit
        )
        conversations = sorted(conversations, key=lambda c: c.updated_at, reverse=True)
        groups = group_by_recency(
            conversations, now=query.now or datetime.now(timezone.utc), tz=query.tz
        )
        return ListConversationsResult(conversations=conversations, groups=groups)
