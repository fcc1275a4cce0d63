from dataclasses import dataclass

import structlog

from src.application.interfaces.bid_window_repository import BidWindowRepository
from src.application.interfaces.event_publisher import EventPublisher
from src.application.interfaces.notification_gateway import GatewayError, NotificationGateway
from src.application.interfaces.offer_ledger import OfferLedger
from src.domain.entities.offer import Offer
from src.domain.enums.offer_status import OfferStatus
from src.domain.errors import BidWindowNotFoundError, OfferNotFoundError
from src.domain.state_machine.offer_state_machine import InvalidStatusTransitionError

logger = structlog.get_logger(__name__)


@dataclass
class UpdateOfferStatusInput:
    list_id: int
    bidder_id: int
    status: OfferStatus
    auth_token: str | None = None


@dataclass
class UpdateOfferStatusOutput:
    offer: Offer
    changed: bool
    notified: bool


class UpdateOfferStatus:
    """
    Use case: The seller accepts (or rejects) a bidder's offer.

    The ledger write is committed before the bidder is notified. A failed
    notification is logged and does not undo the status change; re-applying
    the current status is a no-op that sends nothing.
    """

    def __init__(
        self,
        ledger: OfferLedger,
        window_repo: BidWindowRepository,
        gateway: NotificationGateway,
        event_publisher: EventPublisher,
    ) -> None:
        self._ledger = ledger
        self._window_repo = window_repo
        self._gateway = gateway
        self._event_publisher = event_publisher

    async def execute(self, input_data: UpdateOfferStatusInput) -> UpdateOfferStatusOutput:
        offer = await self._ledger.get(input_data.list_id, input_data.bidder_id)
        if offer is None:
            raise OfferNotFoundError(input_data.list_id, input_data.bidder_id)

        from_status = offer.status

        # May raise InvalidStatusTransitionError; let it propagate to the caller
        if not offer.transition_to(input_data.status):
            return self._unchanged(offer)

        updated = await self._ledger.update_status(
            input_data.list_id,
            input_data.bidder_id,
            input_data.status,
            expected_status=from_status,
        )
        if updated is None:
            # Lost the write to a concurrent request; judge against what it stored
            current = await self._ledger.get(input_data.list_id, input_data.bidder_id)
            if current is None:
                raise OfferNotFoundError(input_data.list_id, input_data.bidder_id)
            if current.status != input_data.status:
                raise InvalidStatusTransitionError(current.status, input_data.status)
            return self._unchanged(current)

        await self._event_publisher.publish_many(offer.collect_events())

        logger.info(
            "offer_status_updated",
            list_id=updated.list_id,
            bidder_id=updated.bidder_id,
            from_status=from_status.value,
            to_status=updated.status.value,
        )

        window = await self._window_repo.get(input_data.list_id)
        if window is None:
            raise BidWindowNotFoundError(input_data.list_id)

        notified = await self._notify(updated, window.owner_id, input_data.auth_token)
        return UpdateOfferStatusOutput(offer=updated, changed=True, notified=notified)

    def _unchanged(self, offer: Offer) -> UpdateOfferStatusOutput:
        logger.info(
            "offer_status_unchanged",
            list_id=offer.list_id,
            bidder_id=offer.bidder_id,
            status=offer.status.value,
        )
        return UpdateOfferStatusOutput(offer=offer, changed=False, notified=False)

    async def _notify(self, offer: Offer, owner_id: int, auth_token: str | None) -> bool:
        try:
            await self._gateway.send_message(
                offer.chat_room_id,
                owner_id,
                f"Bid {offer.status.value}",
                auth_token,
            )
        except GatewayError as exc:
            logger.error(
                "acceptance_notification_failed",
                list_id=offer.list_id,
                bidder_id=offer.bidder_id,
                room_id=offer.chat_room_id,
                error=exc.message,
            )
            return False
        return True
