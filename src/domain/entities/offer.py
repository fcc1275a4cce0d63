from dataclasses import dataclass, field
from datetime import datetime, timezone

from src.domain.enums.offer_status import OfferStatus
from src.domain.errors import InvalidBidError
from src.domain.events.domain_events import (
    DomainEvent,
    OfferStatusChangedEvent,
    OfferSubmittedEvent,
)
from src.domain.state_machine.offer_state_machine import OfferStateMachine

_state_machine = OfferStateMachine()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Offer:
    """
    A single buyer's price proposal on one listing.

    Identified by ``(list_id, bidder_id)``. ``id`` is assigned by the ledger on
    admission and records insertion order, which breaks ties between equal
    prices when ranking.
    """

    list_id: int
    bidder_id: int
    price: int
    chat_room_id: str
    status: OfferStatus = OfferStatus.PENDING
    id: int | None = None
    created_at: datetime = field(default_factory=_utcnow)

    _events: list[DomainEvent] = field(default_factory=list, repr=False, compare=False)

    # -------------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------------

    @classmethod
    def submit(
        cls,
        *,
        list_id: int,
        bidder_id: int,
        price: int,
        chat_room_id: str,
    ) -> "Offer":
        if price <= 0:
            raise InvalidBidError(f"Price must be a positive integer, got {price}.")

        offer = cls(
            list_id=list_id,
            bidder_id=bidder_id,
            price=price,
            chat_room_id=chat_room_id,
        )
        offer._events.append(
            OfferSubmittedEvent(
                list_id=list_id,
                bidder_id=bidder_id,
                price=price,
                chat_room_id=chat_room_id,
            )
        )
        return offer

    # -------------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------------

    def transition_to(self, new_status: OfferStatus) -> bool:
        """
        Validate and apply a status change.

        Returns False when ``new_status`` is already the current status, in
        which case nothing changes and no event is recorded.
        """
        _state_machine.validate_transition(self.status, new_status)
        if new_status == self.status:
            return False

        old_status = self.status
        self.status = new_status
        self._events.append(
            OfferStatusChangedEvent(
                list_id=self.list_id,
                bidder_id=self.bidder_id,
                from_status=old_status,
                to_status=new_status,
            )
        )
        return True

    def collect_events(self) -> list[DomainEvent]:
        """Return pending events and clear the internal buffer."""
        events = list(self._events)
        self._events.clear()
        return events
