from dataclasses import dataclass

import structlog

from src.application.interfaces.event_publisher import EventPublisher
from src.application.interfaces.notification_gateway import GatewayError, NotificationGateway
from src.application.interfaces.offer_ledger import OfferLedger
from src.domain.entities.offer import Offer
from src.domain.errors import DuplicateOfferError, InvalidBidError

logger = structlog.get_logger(__name__)


@dataclass
class SubmitOfferInput:
    list_id: int
    bidder_id: int
    price: int
    auth_token: str | None = None


class SubmitOffer:
    """
    Use case: Admit a buyer's offer on a listing.

    The chat room is created first; the offer is only written once the room
    exists, so a gateway failure leaves nothing behind. A room created for a
    bidder that turns out to be a duplicate is not torn down.
    """

    def __init__(
        self,
        ledger: OfferLedger,
        gateway: NotificationGateway,
        event_publisher: EventPublisher,
    ) -> None:
        self._ledger = ledger
        self._gateway = gateway
        self._event_publisher = event_publisher

    async def execute(self, input_data: SubmitOfferInput) -> Offer:
        if input_data.price <= 0:
            raise InvalidBidError(f"Price must be a positive integer, got {input_data.price}.")

        try:
            room = await self._gateway.create_room(
                input_data.list_id,
                f"Bidding price {input_data.price}",
                input_data.auth_token,
            )
        except GatewayError as exc:
            logger.error(
                "chat_room_creation_failed",
                list_id=input_data.list_id,
                bidder_id=input_data.bidder_id,
                error=exc.message,
            )
            raise

        offer = Offer.submit(
            list_id=input_data.list_id,
            bidder_id=input_data.bidder_id,
            price=input_data.price,
            chat_room_id=room.room_id,
        )

        try:
            saved = await self._ledger.admit(offer)
        except DuplicateOfferError:
            logger.warning(
                "orphaned_chat_room",
                list_id=input_data.list_id,
                bidder_id=input_data.bidder_id,
                room_id=room.room_id,
            )
            raise

        await self._event_publisher.publish_many(offer.collect_events())

        logger.info(
            "offer_submitted",
            list_id=saved.list_id,
            bidder_id=saved.bidder_id,
            price=saved.price,
            room_id=saved.chat_room_id,
        )
        return saved
