"""
AI API Router - stateless AI helpers.

- POST /ai/chat             → completion over a caller-supplied transcript
- POST /ai/extract-product  → product fields from a retailer URL
- POST /ai/product-note     → short note stored on one of the caller's products
- POST /ai/board-insight    → 1-2 sentence insight about a list of products

AI failures are mapped by the application's exception handlers:
429 rate limited, 402 credits exhausted, 503 otherwise.
"""

from logging import getLogger
from typing import Any, Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from productboards.application.commands.products import (
    GenerateProductNoteCommand,
    GenerateProductNoteHandler,
)
from productboards.application.queries.boards import (
    BoardInsightHandler,
    BoardInsightQuery,
    ExtractProductHandler,
    ExtractProductQuery,
)
from productboards.application.queries.chat import CompleteChatHandler, CompleteChatQuery
from productboards.domain.ports.ai_assistant import ProductSummary
from productboards.domain.value_objects.product_id import ProductId
from productboards.presentation.api.ids import parse_id
from productboards.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class ChatTurn(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    messages: list[ChatTurn]
    image_ref: Optional[str] = Field(default=None, alias="imageRef")

    model_config = {"populate_by_name": True}


class ChatResponse(BaseModel):
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class ExtractProductRequest(BaseModel):
    url: str


class ExtractProductResponse(BaseModel):
    name: str
    price: Optional[float] = None
    currency: Optional[str] = None
    image_url: Optional[str] = None
    retailer: Optional[str] = None


class ProductNoteRequest(BaseModel):
    product_id: str = Field(alias="productId")

    model_config = {"populate_by_name": True}


class ProductNoteResponse(BaseModel):
    success: bool
    note: Optional[str] = None


class InsightProduct(BaseModel):
    name: str
    price: Optional[float] = None
    note: Optional[str] = None


class BoardInsightRequest(BaseModel):
    products: list[InsightProduct]


class BoardInsightResponse(BaseModel):
    insight: str


# ==================== ROUTER ====================

router = APIRouter(prefix="/ai", tags=["ai"])


# ==================== ENDPOINTS ====================


@router.post("/chat", response_model=ChatResponse)
@inject
async def chat(
    request: ChatRequest,
    handler: FromDishka[CompleteChatHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    reply = await handler.execute(
        CompleteChatQuery(
            messages=[turn.model_dump() for turn in request.messages],
            image_ref=request.image_ref,
        )
    )
    return ChatResponse(content=reply.content, metadata=reply.metadata)


@router.post("/extract-product", response_model=ExtractProductResponse)
@inject
async def extract_product(
    request: ExtractProductRequest,
    handler: FromDishka[ExtractProductHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    logger.info(f"User {current_user.id} extracting product from {request.url}")
    extracted = await handler.execute(ExtractProductQuery(url=request.url))
    return ExtractProductResponse(
        name=extracted.name,
        price=extracted.price,
        currency=extracted.currency,
        image_url=extracted.image_url,
        retailer=extracted.retailer,
    )


@router.post("/product-note", response_model=ProductNoteResponse)
@inject
async def product_note(
    request: ProductNoteRequest,
    handler: FromDishka[GenerateProductNoteHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """Ownership is verified before the AI is called (403 for foreign products)."""
    product = await handler.execute(
        GenerateProductNoteCommand(
            product_id=parse_id(ProductId, request.product_id, "product id"),
            user_id=current_user.id,
        )
    )
    return ProductNoteResponse(success=True, note=product.ai_note)


@router.post("/board-insight", response_model=BoardInsightResponse)
@inject
async def board_insight(
    request: BoardInsightRequest,
    handler: FromDishka[BoardInsightHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    insight = await handler.execute(
        BoardInsightQuery(
            products=[
                ProductSummary(name=p.name, price=p.price, note=p.note)
                for p in request.products
            ]
        )
    )
    return BoardInsightResponse(insight=insight)
