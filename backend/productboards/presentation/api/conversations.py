"""
Conversations API Router - sidebar, chat history, sending and live updates.

Flow:
  HTTP Request → Router → Command/Query → Handler → Repository → Database
                                 ↓
  HTTP Response ← Router ← DTO ←

The events endpoint streams the conversation as Server-Sent Events: first a
snapshot of the ordered history, then every inserted message (assistant
replies included) as it arrives on the insert feed.
"""

import asyncio
from datetime import timezone, tzinfo
from logging import getLogger
from typing import AsyncIterator, Awaitable, Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from productboards.application.commands.chat import (
    SendMessageCommand,
    SendMessageHandler,
)
from productboards.application.commands.conversations import (
    CreateConversationCommand,
    CreateConversationHandler,
    DeleteConversationCommand,
    DeleteConversationHandler,
    RenameConversationCommand,
    RenameConversationHandler,
)
from productboards.application.dto import (
    ConversationDTO,
    ConversationGroupDTO,
    MessageDTO,
)
from productboards.application.queries.chat import (
    GetChatHistoryHandler,
    GetChatHistoryQuery,
)
from productboards.application.queries.conversations import (
    ListConversationsHandler,
    ListConversationsQuery,
)
from productboards.application.services import LiveMessageList, MessageStore
from productboards.config.settings import Config
from productboards.domain.entities.message import Message
from productboards.domain.exceptions import DomainValidationError
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.user_id import UserId
from productboards.presentation.api.ids import parse_id
from productboards.presentation.api.sse import (
    KEEPALIVE_SECONDS,
    SSE_HEADERS,
    sse_comment,
    sse_event,
)
from productboards.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class CreateConversationRequest(BaseModel):
    title: Optional[str] = None


class RenameConversationRequest(BaseModel):
    title: str


class DeleteConversationResponse(BaseModel):
    success: bool


class ListConversationsResponse(BaseModel):
    conversations: list[ConversationDTO]
    groups: list[ConversationGroupDTO]


class GetConversationResponse(BaseModel):
    conversation: ConversationDTO
    messages: list[MessageDTO]


class SendMessageRequest(BaseModel):
    content: str
    image_ref: Optional[str] = Field(default=None, alias="imageRef")

    model_config = {"populate_by_name": True}


# ==================== HELPERS ====================


def resolve_timezone(name: Optional[str]) -> tzinfo:
    name = name or Config.DEFAULT_TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise DomainValidationError(f"Unknown time zone: {name}") from e


def _conversation_id(raw: str) -> ConversationId:
    return parse_id(ConversationId, raw, "conversation id")


async def conversation_events(
    message_store: MessageStore,
    conversation_id: ConversationId,
    user_id: UserId,
    is_disconnected: Callable[[], Awaitable[bool]],
    keepalive: float = KEEPALIVE_SECONDS,
) -> AsyncIterator[str]:
    """
    SSE body of a conversation: one `snapshot` event with the ordered history,
    then one `message` event per inserted message.

    The feed subscription lives only while the body is being iterated, so a
    response that is never streamed holds nothing.
    """
    queue: asyncio.Queue[Message] = asyncio.Queue()
    async with LiveMessageList(
        message_store, conversation_id, user_id, on_change=queue.put_nowait
    ) as live:
        yield sse_event(
            "snapshot",
            [MessageDTO.from_entity(m).model_dump(mode="json") for m in live.messages],
        )
        while not await is_disconnected():
            try:
                message = await asyncio.wait_for(queue.get(), keepalive)
            except asyncio.TimeoutError:
                yield sse_comment()
                continue
            yield sse_event(
                "message",
                MessageDTO.from_entity(message).model_dump(mode="json"),
                event_id=message.id.value,
            )
    logger.debug(f"Event stream for conversation {conversation_id.value} closed")


# ==================== ROUTER ====================

router = APIRouter(prefix="/conversations", tags=["conversations"])


# ==================== ENDPOINTS ====================


@router.get("", response_model=ListConversationsResponse)
@inject
async def list_conversations(
    handler: FromDishka[ListConversationsHandler],
    tz: Optional[str] = Query(default=None),
    current_user: AuthUser = Depends(get_current_user),
):
    """Conversations of the caller, newest first, plus recency groups."""
    result = await handler.execute(
        ListConversationsQuery(user_id=current_user.id, tz=resolve_timezone(tz))
    )
    return ListConversationsResponse(
        conversations=[ConversationDTO.from_entity(c) for c in result.conversations],
        groups=[
            ConversationGroupDTO(
                label=bucket.value,
                conversations=[ConversationDTO.from_entity(c) for c in items],
            )
            for bucket, items in result.groups.items()
            if items
        ],
    )


@router.post(
    "",
    response_model=ConversationDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_conversation(
    handler: FromDishka[CreateConversationHandler],
    request: Optional[CreateConversationRequest] = None,
    current_user: AuthUser = Depends(get_current_user),
):
    """Create a new, empty conversation titled "New Chat" unless a title is given."""
    conversation = await handler.execute(
        CreateConversationCommand(
            user_id=current_user.id,
            title=request.title if request else None,
        )
    )
    return ConversationDTO.from_entity(conversation)


@router.get("/{conversation_id}", response_model=GetConversationResponse)
@inject
async def get_conversation(
    conversation_id: str,
    handler: FromDishka[GetChatHistoryHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """Conversation with its messages in ascending order."""
    result = await handler.execute(
        GetChatHistoryQuery(
            conversation_id=_conversation_id(conversation_id),
            user_id=current_user.id,
        )
    )
    return GetConversationResponse(
        conversation=ConversationDTO.from_entity(result.conversation),
        messages=[MessageDTO.from_entity(m) for m in result.messages],
    )


@router.patch("/{conversation_id}", response_model=ConversationDTO)
@inject
async def rename_conversation(
    conversation_id: str,
    request: RenameConversationRequest,
    handler: FromDishka[RenameConversationHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    conversation = await handler.execute(
        RenameConversationCommand(
            conversation_id=_conversation_id(conversation_id),
            user_id=current_user.id,
            new_title=request.title,
        )
    )
    return ConversationDTO.from_entity(conversation)


@router.delete("/{conversation_id}", response_model=DeleteConversationResponse)
@inject
async def delete_conversation(
    conversation_id: str,
    handler: FromDishka[DeleteConversationHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """Delete a conversation; deleting one that is already gone also succeeds."""
    await handler.execute(
        DeleteConversationCommand(
            conversation_id=_conversation_id(conversation_id),
            user_id=current_user.id,
        )
    )
    return DeleteConversationResponse(success=True)


@router.get("/{conversation_id}/messages", response_model=list[MessageDTO])
@inject
async def load_messages(
    conversation_id: str,
    message_store: FromDishka[MessageStore],
    current_user: AuthUser = Depends(get_current_user),
):
    messages = await message_store.load(
        _conversation_id(conversation_id), current_user.id
    )
    return [MessageDTO.from_entity(m) for m in messages]


@router.post(
    "/{conversation_id}/messages",
    response_model=MessageDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def send_message(
    conversation_id: str,
    request: SendMessageRequest,
    handler: FromDishka[SendMessageHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """
    Send a user message and wait for the assistant reply to be stored.

    Returns the stored user message; the assistant message reaches every
    viewer through the events stream.
    """
    message = await handler.execute(
        SendMessageCommand(
            conversation_id=_conversation_id(conversation_id),
            user_id=current_user.id,
            content=request.content,
            image_ref=request.image_ref,
        )
    )
    return MessageDTO.from_entity(message)


@router.get("/{conversation_id}/events")
@inject
async def stream_messages(
    conversation_id: str,
    request: Request,
    message_store: FromDishka[MessageStore],
    current_user: AuthUser = Depends(get_current_user),
):
    """SSE stream of the conversation, see `conversation_events`."""
    conv_id = _conversation_id(conversation_id)
    # Visibility errors surface as a normal 404 before the stream starts
    await message_store.ensure_visible(conv_id, current_user.id)
    return StreamingResponse(
        conversation_events(
            message_store, conv_id, current_user.id, request.is_disconnected
        ),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
