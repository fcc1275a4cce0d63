from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.domain.enums.offer_status import OfferStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class BidWindowOpenedEvent(DomainEvent):
    """Published when a seller opens bidding on a listing."""

    list_id: int = 0
    owner_id: int = 0
    ttl_seconds: int = 0


@dataclass(frozen=True)
class OfferSubmittedEvent(DomainEvent):
    """Published when a buyer's offer has been admitted to the ledger."""

    list_id: int = 0
    bidder_id: int = 0
    price: int = 0
    chat_room_id: str = ""


@dataclass(frozen=True)
class OfferStatusChangedEvent(DomainEvent):
    """Published whenever an offer moves to a new status."""

    list_id: int = 0
    bidder_id: int = 0
    from_status: OfferStatus = OfferStatus.PENDING
    to_status: OfferStatus = OfferStatus.PENDING
