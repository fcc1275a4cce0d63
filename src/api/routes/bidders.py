from fastapi import APIRouter, Depends, Query

from src.api.dependencies import (
    get_auth_token,
    get_list_ranked_offers_use_case,
    get_settings,
    get_submit_offer_use_case,
    get_update_offer_status_use_case,
)
from src.api.schemas.bid_schemas import (
    ErrorResponse,
    OfferResponse,
    RankedOffersResponse,
    SubmitOfferRequest,
    UpdateOfferStatusRequest,
)
from src.application.use_cases.list_ranked_offers import (
    ListRankedOffers,
    ListRankedOffersInput,
)
from src.application.use_cases.submit_offer import SubmitOffer, SubmitOfferInput
from src.application.use_cases.update_offer_status import (
    UpdateOfferStatus,
    UpdateOfferStatusInput,
)
from src.config import Settings
from src.domain.entities.offer import Offer

router = APIRouter(
    prefix="/bidder",
    tags=["bidder"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _offer_to_response(offer: Offer) -> OfferResponse:
    return OfferResponse(
        list_id=offer.list_id,
        price=offer.price,
        bidder=offer.bidder_id,
        status=offer.status,
        chat_room_id=offer.chat_room_id,
    )


@router.post("", response_model=str)
async def submit_offer(
    body: SubmitOfferRequest,
    auth_token: str | None = Depends(get_auth_token),
    use_case: SubmitOffer = Depends(get_submit_offer_use_case),
) -> str:
    """Buyer bids on a listing; a chat room with the seller is opened first."""
    await use_case.execute(
        SubmitOfferInput(
            list_id=body.list_id,
            bidder_id=body.bidder,
            price=body.price,
            auth_token=auth_token,
        )
    )
    return "OK"


@router.put("", response_model=str)
async def update_offer_status(
    body: UpdateOfferStatusRequest,
    auth_token: str | None = Depends(get_auth_token),
    use_case: UpdateOfferStatus = Depends(get_update_offer_status_use_case),
) -> str:
    """Seller accepts a bidder. The bidder is told through the offer's chat room."""
    await use_case.execute(
        UpdateOfferStatusInput(
            list_id=body.list_id,
            bidder_id=body.bidder,
            status=body.status,
            auth_token=auth_token,
        )
    )
    return "OK"


@router.get("/{list_id}", response_model=RankedOffersResponse)
async def list_ranked_offers(
    list_id: int,
    limit: int | None = Query(default=None, ge=1),
    settings: Settings = Depends(get_settings),
    use_case: ListRankedOffers = Depends(get_list_ranked_offers_use_case),
) -> RankedOffersResponse:
    """Cheapest offers first, plus the total number of offers on the listing."""
    effective_limit = min(limit or settings.ranking_default_limit, settings.ranking_max_limit)
    result = await use_case.execute(ListRankedOffersInput(list_id=list_id, limit=effective_limit))
    return RankedOffersResponse(
        count=result.count,
        bid=[_offer_to_response(o) for o in result.offers],
    )
