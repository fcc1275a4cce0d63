from fastapi import APIRouter, Depends

from src.api.dependencies import get_bid_window_use_case, get_open_bid_window_use_case
from src.api.schemas.bid_schemas import (
    BidWindowResponse,
    ErrorResponse,
    OpenBidWindowRequest,
)
from src.application.use_cases.get_bid_window import GetBidWindow
from src.application.use_cases.open_bid_window import OpenBidWindow, OpenBidWindowInput

router = APIRouter(prefix="/bid", tags=["bid"], responses={400: {"model": ErrorResponse}})


@router.post("", response_model=str)
async def open_bid_window(
    body: OpenBidWindowRequest,
    use_case: OpenBidWindow = Depends(get_open_bid_window_use_case),
) -> str:
    """Seller opens bidding on a listing."""
    await use_case.execute(
        OpenBidWindowInput(list_id=body.list_id, owner_id=body.owner, ttl_seconds=body.ttl)
    )
    return "OK"


@router.get("/{list_id}", response_model=BidWindowResponse)
async def get_bid_window(
    list_id: int,
    use_case: GetBidWindow = Depends(get_bid_window_use_case),
) -> BidWindowResponse:
    """Returns the window with ``ttl`` recomputed as the seconds remaining."""
    result = await use_case.execute(list_id)
    return BidWindowResponse(
        list_id=result.window.list_id,
        owner=result.window.owner_id,
        ttl=result.remaining_seconds,
    )
