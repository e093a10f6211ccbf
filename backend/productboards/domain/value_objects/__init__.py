"""
VALUE OBJECTS - Immutable identity wrappers

Each identifier is a frozen dataclass around a UUID string, so that a board id
can never be passed where a conversation id is expected.
"""

from productboards.domain.value_objects.user_id import UserId
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.message_id import MessageId
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.product_link_id import ProductLinkId
from productboards.domain.value_objects.share_token import ShareToken

__all__ = [
    "UserId",
    "ConversationId",
    "MessageId",
    "BoardId",
    "ProductId",
    "ProductLinkId",
    "ShareToken",
]
