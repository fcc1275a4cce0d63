from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.bid_window_repository import BidWindowRepository
from src.domain.entities.bid_window import BidWindow
from src.domain.errors import DuplicateWindowError
from src.infrastructure.database.models import BidWindowModel


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _to_domain(model: BidWindowModel) -> BidWindow:
    return BidWindow(
        list_id=model.list_id,
        owner_id=model.owner_id,
        ttl_seconds=model.ttl_seconds,
        opened_at=_as_utc(model.opened_at),
    )


class SqlAlchemyBidWindowRepository(BidWindowRepository):
    """SQLAlchemy-backed implementation of BidWindowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def open(self, window: BidWindow) -> BidWindow:
        model = BidWindowModel(
            list_id=window.list_id,
            owner_id=window.owner_id,
            opened_at=window.opened_at,
            ttl_seconds=window.ttl_seconds,
        )
        self._session.add(model)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateWindowError(window.list_id) from exc
        return _to_domain(model)

    async def get(self, list_id: int) -> BidWindow | None:
        model = await self._session.get(BidWindowModel, list_id)
        return _to_domain(model) if model is not None else None
