"""
Products API Router - products, their retailer links and price history.

- /products/{id}                 get / partial update / delete
- /products/{id}/move            move to another of the caller's boards
- /products/{id}/links           add a retailer link
- /product-links/{id}/prices     price history / record a price
- /product-links/{id}/events     SSE stream of recorded prices
"""

import asyncio
from logging import getLogger
from typing import AsyncIterator, Awaitable, Callable, Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from productboards.application.commands.products import (
    AddProductLinkCommand,
    AddProductLinkHandler,
    DeleteProductCommand,
    DeleteProductHandler,
    MoveProductCommand,
    MoveProductHandler,
    RecordPriceCommand,
    RecordPriceHandler,
    UpdateProductCommand,
    UpdateProductHandler,
)
from productboards.application.dto import PriceHistoryDTO, ProductDTO, ProductLinkDTO
from productboards.application.queries.products import (
    GetPriceHistoryHandler,
    GetPriceHistoryQuery,
    GetProductHandler,
    GetProductQuery,
)
from productboards.application.services import PriceWatch
from productboards.domain.entities.product import PriceHistoryEntry
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.product_link_id import ProductLinkId
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


class UpdateProductRequest(BaseModel):
    """Partial update: only the fields present in the body are changed."""

    name: Optional[str] = None
    image_url: Optional[str] = None
    note: Optional[str] = None
    current_price: Optional[float] = None
    currency: Optional[str] = None
    price_alert_enabled: Optional[bool] = None
    target_price: Optional[float] = None


class MoveProductRequest(BaseModel):
    board_id: str = Field(alias="boardId")

    model_config = {"populate_by_name": True}


class AddLinkRequest(BaseModel):
    url: str
    retailer: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None


class RecordPriceRequest(BaseModel):
    price: float
    currency: Optional[str] = None


class DeleteProductResponse(BaseModel):
    success: bool


def _product_id(raw: str) -> ProductId:
    return parse_id(ProductId, raw, "product id")


def _link_id(raw: str) -> ProductLinkId:
    return parse_id(ProductLinkId, raw, "product link id")


async def price_events(
    price_watch: PriceWatch,
    link_id: ProductLinkId,
    user_id: UserId,
    is_disconnected: Callable[[], Awaitable[bool]],
    keepalive: float = KEEPALIVE_SECONDS,
) -> AsyncIterator[str]:
    """SSE body with one `price` event per recorded price of the link."""
    queue: asyncio.Queue[PriceHistoryEntry] = asyncio.Queue()
    subscription = await price_watch.subscribe(link_id, user_id, queue.put_nowait)
    sent: set[str] = set()
    try:
        while not await is_disconnected():
            try:
                entry = await asyncio.wait_for(queue.get(), keepalive)
            except asyncio.TimeoutError:
                yield sse_comment()
                continue
            if entry.id in sent:
                continue
            sent.add(entry.id)
            yield sse_event(
                "price",
                PriceHistoryDTO.from_entity(entry).model_dump(mode="json"),
                event_id=entry.id,
            )
    finally:
        await subscription.release()


# ==================== ROUTERS ====================

router = APIRouter(prefix="/products", tags=["products"])
links_router = APIRouter(prefix="/product-links", tags=["products"])


# ==================== PRODUCT ENDPOINTS ====================


@router.get("/{product_id}", response_model=ProductDTO)
@inject
async def get_product(
    product_id: str,
    handler: FromDishka[GetProductHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    product = await handler.execute(
        GetProductQuery(product_id=_product_id(product_id), user_id=current_user.id)
    )
    return ProductDTO.from_entity(product)


@router.patch("/{product_id}", response_model=ProductDTO)
@inject
async def update_product(
    product_id: str,
    request: UpdateProductRequest,
    handler: FromDishka[UpdateProductHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    product = await handler.execute(
        UpdateProductCommand(
            product_id=_product_id(product_id),
            user_id=current_user.id,
            changes=request.model_dump(exclude_unset=True),
        )
    )
    return ProductDTO.from_entity(product)


@router.delete("/{product_id}", response_model=DeleteProductResponse)
@inject
async def delete_product(
    product_id: str,
    handler: FromDishka[DeleteProductHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    await handler.execute(
        DeleteProductCommand(product_id=_product_id(product_id), user_id=current_user.id)
    )
    return DeleteProductResponse(success=True)


@router.post("/{product_id}/move", response_model=ProductDTO)
@inject
async def move_product(
    product_id: str,
    request: MoveProductRequest,
    handler: FromDishka[MoveProductHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    product = await handler.execute(
        MoveProductCommand(
            product_id=_product_id(product_id),
            user_id=current_user.id,
            to_board_id=parse_id(BoardId, request.board_id, "board id"),
        )
    )
    return ProductDTO.from_entity(product)


@router.post(
    "/{product_id}/links",
    response_model=ProductLinkDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def add_link(
    product_id: str,
    request: AddLinkRequest,
    handler: FromDishka[AddProductLinkHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    link = await handler.execute(
        AddProductLinkCommand(
            product_id=_product_id(product_id),
            user_id=current_user.id,
            url=request.url,
            retailer=request.retailer,
            price=request.price,
            currency=request.currency,
        )
    )
    return ProductLinkDTO.from_entity(link)


# ==================== PRICE ENDPOINTS ====================


@links_router.get("/{link_id}/prices", response_model=list[PriceHistoryDTO])
@inject
async def price_history(
    link_id: str,
    handler: FromDishka[GetPriceHistoryHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    entries = await handler.execute(
        GetPriceHistoryQuery(link_id=_link_id(link_id), user_id=current_user.id)
    )
    return [PriceHistoryDTO.from_entity(e) for e in entries]


@links_router.post(
    "/{link_id}/prices",
    response_model=PriceHistoryDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def record_price(
    link_id: str,
    request: RecordPriceRequest,
    handler: FromDishka[RecordPriceHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    entry = await handler.execute(
        RecordPriceCommand(
            link_id=_link_id(link_id),
            user_id=current_user.id,
            price=request.price,
            currency=request.currency,
        )
    )
    return PriceHistoryDTO.from_entity(entry)


@links_router.get("/{link_id}/events")
@inject
async def stream_prices(
    link_id: str,
    request: Request,
    price_watch: FromDishka[PriceWatch],
    current_user: AuthUser = Depends(get_current_user),
):
    """SSE stream of recorded prices, see `price_events`."""
    parsed = _link_id(link_id)
    await price_watch.ensure_visible(parsed, current_user.id)
    return StreamingResponse(
        price_events(price_watch, parsed, current_user.id, request.is_disconnected),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
