from dataclasses import dataclass

import structlog

from src.application.interfaces.bid_window_repository import BidWindowRepository
from src.application.interfaces.event_publisher import EventPublisher
from src.domain.entities.bid_window import BidWindow

logger = structlog.get_logger(__name__)


@dataclass
class OpenBidWindowInput:
    list_id: int
    owner_id: int
    ttl_seconds: int


class OpenBidWindow:
    """Use case: Open bidding on a listing. Fails with DuplicateWindowError if already open."""

    def __init__(
        self,
        window_repo: BidWindowRepository,
        event_publisher: EventPublisher,
    ) -> None:
        self._window_repo = window_repo
        self._event_publisher = event_publisher

    async def execute(self, input_data: OpenBidWindowInput) -> BidWindow:
        window = BidWindow.open(
            list_id=input_data.list_id,
            owner_id=input_data.owner_id,
            ttl_seconds=input_data.ttl_seconds,
        )

        # May raise DuplicateWindowError; let it propagate to the caller
        saved = await self._window_repo.open(window)

        await self._event_publisher.publish_many(window.collect_events())

        logger.info(
            "bid_window_opened",
            list_id=saved.list_id,
            owner_id=saved.owner_id,
            ttl_seconds=saved.ttl_seconds,
        )
        return saved
