from abc import ABC, abstractmethod

from src.domain.entities.bid_window import BidWindow


class BidWindowRepository(ABC):
    """Port for persisting and reading bid windows (one per listing)."""

    @abstractmethod
    async def open(self, window: BidWindow) -> BidWindow:
        """Persist a new window; raises DuplicateWindowError if one exists."""
        ...

    @abstractmethod
    async def get(self, list_id: int) -> BidWindow | None:
        ...
