from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.offer_ledger import DEFAULT_RANK_LIMIT, OfferLedger
from src.domain.entities.offer import Offer
from src.domain.enums.offer_status import OfferStatus
from src.domain.errors import DuplicateOfferError, OfferNotFoundError
from src.infrastructure.database.models import OfferModel


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _to_domain(model: OfferModel) -> Offer:
    return Offer(
        id=model.id,
        list_id=model.list_id,
        bidder_id=model.bidder_id,
        price=model.price,
        status=OfferStatus(model.status),
        chat_room_id=model.chat_room_id,
        created_at=_as_utc(model.created_at),
    )


class SqlAlchemyOfferLedger(OfferLedger):
    """SQLAlchemy-backed implementation of OfferLedger."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_model(
        self, list_id: int, bidder_id: int, refresh: bool = False
    ) -> OfferModel | None:
        stmt = select(OfferModel).where(
            OfferModel.list_id == list_id,
            OfferModel.bidder_id == bidder_id,
        )
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def admit(self, offer: Offer) -> Offer:
        model = OfferModel(
            list_id=offer.list_id,
            bidder_id=offer.bidder_id,
            price=offer.price,
            status=OfferStatus.PENDING,
            chat_room_id=offer.chat_room_id,
            created_at=offer.created_at,
        )
        self._session.add(model)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateOfferError(offer.list_id, offer.bidder_id) from exc

        offer.id = model.id
        offer.status = OfferStatus.PENDING
        return _to_domain(model)

    async def get(self, list_id: int, bidder_id: int) -> Offer | None:
        model = await self._get_model(list_id, bidder_id)
        return _to_domain(model) if model is not None else None

    async def update_status(
        self,
        list_id: int,
        bidder_id: int,
        status: OfferStatus,
        expected_status: OfferStatus | None = None,
    ) -> Offer | None:
        stmt = (
            update(OfferModel)
            .where(
                OfferModel.list_id == list_id,
                OfferModel.bidder_id == bidder_id,
                OfferModel.status != status,
            )
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        if expected_status is not None:
            stmt = stmt.where(OfferModel.status == expected_status)

        result = await self._session.execute(stmt)
        await self._session.commit()

        model = await self._get_model(list_id, bidder_id, refresh=True)
        if model is None:
            raise OfferNotFoundError(list_id, bidder_id)
        if result.rowcount == 0 and expected_status is not None:
            # Another writer moved the offer off expected_status first
            return None
        return _to_domain(model)

    async def rank(self, list_id: int, limit: int = DEFAULT_RANK_LIMIT) -> list[Offer]:
        result = await self._session.execute(
            select(OfferModel)
            .where(OfferModel.list_id == list_id)
            .order_by(OfferModel.price.asc(), OfferModel.id.asc())
            .limit(limit)
        )
        return [_to_domain(m) for m in result.scalars().all()]

    async def count(self, list_id: int) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(OfferModel).where(OfferModel.list_id == list_id)
        )
        return result.scalar_one()
