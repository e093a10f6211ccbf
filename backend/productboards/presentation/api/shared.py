"""
Shared Boards API Router - public, unauthenticated board view.
"""

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter

from productboards.application.dto import BoardDTO, ProductDTO, SharedBoardDTO
from productboards.application.queries.boards import (
    GetSharedBoardHandler,
    GetSharedBoardQuery,
)
from productboards.domain.value_objects.share_token import ShareToken
from productboards.presentation.api.ids import parse_id

router = APIRouter(prefix="/shared", tags=["shared"])


@router.get("/{share_token}", response_model=SharedBoardDTO)
@inject
async def get_shared_board(
    share_token: str,
    handler: FromDishka[GetSharedBoardHandler],
):
    """Board and products of a public board; private or unknown tokens are 404."""
    result = await handler.execute(
        GetSharedBoardQuery(share_token=parse_id(ShareToken, share_token, "share token"))
    )
    return SharedBoardDTO(
        board=BoardDTO.from_entity(result.board),
        products=[ProductDTO.from_entity(p) for p in result.products],
    )
