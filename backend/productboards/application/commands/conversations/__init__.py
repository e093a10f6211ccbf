"""Conversation commands."""

from .create_conversation import CreateConversationCommand, CreateConversationHandler
from .delete_conversation import DeleteConversationCommand, DeleteConversationHandler
from .rename_conversation import RenameConversationCommand, RenameConversationHandler

__all__ = [
    "CreateConversationCommand",
    "CreateConversationHandler",
    "DeleteConversationCommand",
    "DeleteConversationHandler",
    "RenameConversationCommand",
    "RenameConversationHandler",
]
