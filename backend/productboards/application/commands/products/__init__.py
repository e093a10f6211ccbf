"""Product commands."""

from .create_product import CreateProductCommand, CreateProductHandler
from .update_product import UpdateProductCommand, UpdateProductHandler
from .delete_product import DeleteProductCommand, DeleteProductHandler
from .move_product import MoveProductCommand, MoveProductHandler
from .add_product_link import AddProductLinkCommand, AddProductLinkHandler
from .record_price import RecordPriceCommand, RecordPriceHandler
from .generate_product_note import (
    GenerateProductNoteCommand,
    GenerateProductNoteHandler,
)
from .add_product_from_link import AddProductFromLinkCommand, AddProductFromLinkHandler

__all__ = [
    "CreateProductCommand",
    "CreateProductHandler",
    "UpdateProductCommand",
    "UpdateProductHandler",
    "DeleteProductCommand",
    "DeleteProductHandler",
    "MoveProductCommand",
    "MoveProductHandler",
    "AddProductLinkCommand",
    "AddProductLinkHandler",
    "RecordPriceCommand",
    "RecordPriceHandler",
    "GenerateProductNoteCommand",
    "GenerateProductNoteHandler",
    "AddProductFromLinkCommand",
    "AddProductFromLinkHandler",
]
