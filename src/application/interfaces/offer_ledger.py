from abc import ABC, abstractmethod

from src.domain.entities.offer import Offer
from src.domain.enums.offer_status import OfferStatus

DEFAULT_RANK_LIMIT = 10


class OfferLedger(ABC):
    """
    Port for the store of all bidder offers.

    Enforces uniqueness of ``(list_id, bidder_id)`` and price ranking; it never
    originates status changes on its own.
    """

    @abstractmethod
    async def admit(self, offer: Offer) -> Offer:
        """Persist a new offer; raises DuplicateOfferError on a repeat bidder."""
        ...

    @abstractmethod
    async def get(self, list_id: int, bidder_id: int) -> Offer | None:
        ...

    @abstractmethod
    async def update_status(
        self,
        list_id: int,
        bidder_id: int,
        status: OfferStatus,
        expected_status: OfferStatus | None = None,
    ) -> Offer | None:
        """
        Set the offer's status in place; raises OfferNotFoundError.

        With ``expected_status`` the write is conditional: it only applies while
        the stored status still equals ``expected_status``, and None is returned
        when it did not apply.
        """
        ...

    @abstractmethod
    async def rank(self, list_id: int, limit: int = DEFAULT_RANK_LIMIT) -> list[Offer]:
        """Return at most ``limit`` offers, cheapest first, ties in insertion order."""
        ...

    @abstractmethod
    async def count(self, list_id: int) -> int:
        ...
