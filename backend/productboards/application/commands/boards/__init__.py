"""Board commands."""

from .create_board import CreateBoardCommand, CreateBoardHandler
from .update_board import UpdateBoardCommand, UpdateBoardHandler
from .delete_board import DeleteBoardCommand, DeleteBoardHandler
from .toggle_sharing import ToggleBoardSharingCommand, ToggleBoardSharingHandler

__all__ = [
    "CreateBoardCommand",
    "CreateBoardHandler",
    "UpdateBoardCommand",
    "UpdateBoardHandler",
    "DeleteBoardCommand",
    "DeleteBoardHandler",
    "ToggleBoardSharingCommand",
    "ToggleBoardSharingHandler",
]
