from dataclasses import dataclass

from src.application.interfaces.offer_ledger import DEFAULT_RANK_LIMIT, OfferLedger
from src.domain.entities.offer import Offer


@dataclass
class ListRankedOffersInput:
    list_id: int
    limit: int = DEFAULT_RANK_LIMIT


@dataclass
class ListRankedOffersOutput:
    count: int
    offers: list[Offer]


class ListRankedOffers:
    """Use case: The cheapest offers on a listing plus the total number of offers."""

    def __init__(self, ledger: OfferLedger) -> None:
        self._ledger = ledger

    async def execute(self, input_data: ListRankedOffersInput) -> ListRankedOffersOutput:
        offers = await self._ledger.rank(input_data.list_id, input_data.limit)
        count = await self._ledger.count(input_data.list_id)
        return ListRankedOffersOutput(count=count, offers=offers)
