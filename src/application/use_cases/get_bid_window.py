from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from src.application.interfaces.bid_window_repository import BidWindowRepository
from src.domain.entities.bid_window import BidWindow
from src.domain.errors import BidWindowNotFoundError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class GetBidWindowOutput:
    window: BidWindow
    remaining_seconds: int


class GetBidWindow:
    """Use case: Look up a listing's bid window and how long it has left."""

    def __init__(
        self,
        window_repo: BidWindowRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._window_repo = window_repo
        self._clock = clock

    async def execute(self, list_id: int) -> GetBidWindowOutput:
        window = await self._window_repo.get(list_id)
        if window is None:
            raise BidWindowNotFoundError(list_id)

        return GetBidWindowOutput(
            window=window,
            remaining_seconds=window.remaining_seconds(self._clock()),
        )
