from pydantic import BaseModel, Field

from src.domain.enums.error_kind import ErrorKind
from src.domain.enums.offer_status import OfferStatus


class OpenBidWindowRequest(BaseModel):
    list_id: int
    owner: int
    ttl: int


class BidWindowResponse(BaseModel):
    list_id: int
    owner: int
    ttl: int  # remaining seconds, negative once the window has closed


class SubmitOfferRequest(BaseModel):
    list_id: int
    price: int = Field(gt=0)
    bidder: int


class UpdateOfferStatusRequest(BaseModel):
    list_id: int
    bidder: int
    status: OfferStatus


class OfferResponse(BaseModel):
    list_id: int
    price: int
    bidder: int
    status: OfferStatus
    chat_room_id: str


class RankedOffersResponse(BaseModel):
    count: int
    bid: list[OfferResponse]


class ErrorDetail(BaseModel):
    kind: ErrorKind
    message: str


class ErrorResponse(BaseModel):
    errors: list[ErrorDetail]
