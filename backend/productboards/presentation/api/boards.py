"""
Boards API Router - board management, sharing and board-scoped products.
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from productboards.application.commands.boards import (
    CreateBoardCommand,
    CreateBoardHandler,
    DeleteBoardCommand,
    DeleteBoardHandler,
    ToggleBoardSharingCommand,
    ToggleBoardSharingHandler,
    UpdateBoardCommand,
    UpdateBoardHandler,
)
from productboards.application.commands.products import (
    AddProductFromLinkCommand,
    AddProductFromLinkHandler,
    CreateProductCommand,
    CreateProductHandler,
)
from productboards.application.dto import BoardDTO, ProductDTO
from productboards.application.queries.boards import (
    GetBoardHandler,
    GetBoardQuery,
    ListBoardsHandler,
    ListBoardsQuery,
    StoredBoardInsightHandler,
    StoredBoardInsightQuery,
)
from productboards.application.queries.products import (
    ListProductsHandler,
    ListProductsQuery,
)
from productboards.domain.value_objects.board_id import BoardId
from productboards.presentation.api.ids import parse_id
from productboards.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class BoardRequest(BaseModel):
    name: str
    note: Optional[str] = None


class SharingRequest(BaseModel):
    is_public: bool = Field(alias="isPublic")

    model_config = {"populate_by_name": True}


class DeleteBoardResponse(BaseModel):
    success: bool


class InsightResponse(BaseModel):
    insight: str


class CreateProductRequest(BaseModel):
    name: str
    image_url: Optional[str] = None
    note: Optional[str] = None
    current_price: Optional[float] = None
    currency: Optional[str] = None


class ProductFromLinkRequest(BaseModel):
    url: str


def _board_id(raw: str) -> BoardId:
    return parse_id(BoardId, raw, "board id")


# ==================== ROUTER ====================

router = APIRouter(prefix="/boards", tags=["boards"])


# ==================== ENDPOINTS ====================


@router.get("", response_model=list[BoardDTO])
@inject
async def list_boards(
    handler: FromDishka[ListBoardsHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    boards = await handler.execute(ListBoardsQuery(user_id=current_user.id))
    return [BoardDTO.from_entity(b) for b in boards]


@router.post("", response_model=BoardDTO, status_code=status.HTTP_201_CREATED)
@inject
async def create_board(
    request: BoardRequest,
    handler: FromDishka[CreateBoardHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    board = await handler.execute(
        CreateBoardCommand(user_id=current_user.id, name=request.name, note=request.note)
    )
    return BoardDTO.from_entity(board)


@router.get("/{board_id}", response_model=BoardDTO)
@inject
async def get_board(
    board_id: str,
    handler: FromDishka[GetBoardHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    board = await handler.execute(
        GetBoardQuery(board_id=_board_id(board_id), user_id=current_user.id)
    )
    return BoardDTO.from_entity(board)


@router.patch("/{board_id}", response_model=BoardDTO)
@inject
async def update_board(
    board_id: str,
    request: BoardRequest,
    handler: FromDishka[UpdateBoardHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    board = await handler.execute(
        UpdateBoardCommand(
            board_id=_board_id(board_id),
            user_id=current_user.id,
            name=request.name,
            note=request.note,
        )
    )
    return BoardDTO.from_entity(board)


@router.delete("/{board_id}", response_model=DeleteBoardResponse)
@inject
async def delete_board(
    board_id: str,
    handler: FromDishka[DeleteBoardHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    await handler.execute(
        DeleteBoardCommand(board_id=_board_id(board_id), user_id=current_user.id)
    )
    return DeleteBoardResponse(success=True)


@router.post("/{board_id}/sharing", response_model=BoardDTO)
@inject
async def toggle_sharing(
    board_id: str,
    request: SharingRequest,
    handler: FromDishka[ToggleBoardSharingHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """Publishing issues a new share token; unpublishing clears it."""
    board = await handler.execute(
        ToggleBoardSharingCommand(
            board_id=_board_id(board_id),
            user_id=current_user.id,
            is_public=request.is_public,
        )
    )
    return BoardDTO.from_entity(board)


@router.get("/{board_id}/insight", response_model=InsightResponse)
@inject
async def board_insight(
    board_id: str,
    handler: FromDishka[StoredBoardInsightHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    insight = await handler.execute(
        StoredBoardInsightQuery(board_id=_board_id(board_id), user_id=current_user.id)
    )
    return InsightResponse(insight=insight)


@router.get("/{board_id}/products", response_model=list[ProductDTO])
@inject
async def list_products(
    board_id: str,
    handler: FromDishka[ListProductsHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    products = await handler.execute(
        ListProductsQuery(board_id=_board_id(board_id), user_id=current_user.id)
    )
    return [ProductDTO.from_entity(p) for p in products]


@router.post(
    "/{board_id}/products",
    response_model=ProductDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_product(
    board_id: str,
    request: CreateProductRequest,
    handler: FromDishka[CreateProductHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    product = await handler.execute(
        CreateProductCommand(
            board_id=_board_id(board_id),
            user_id=current_user.id,
            name=request.name,
            image_url=request.image_url,
            note=request.note,
            current_price=request.current_price,
            currency=request.currency,
        )
    )
    return ProductDTO.from_entity(product)


@router.post(
    "/{board_id}/products/from-link",
    response_model=ProductDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_product_from_link(
    board_id: str,
    request: ProductFromLinkRequest,
    handler: FromDishka[AddProductFromLinkHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """Extract the product from a retailer URL, store it with its link and an AI note."""
    product = await handler.execute(
        AddProductFromLinkCommand(
            board_id=_board_id(board_id), user_id=current_user.id, url=request.url
        )
    )
    return ProductDTO.from_entity(product)
