"""
SQLAlchemy ORM models.

These are purely infrastructure concerns; domain entities are mapped to/from
these models inside the repository implementations.
"""
from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    DateTime,
    Enum as SAEnum,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.enums.offer_status import OfferStatus
from src.infrastructure.database.connection import Base

_offer_status_enum = SAEnum(
    OfferStatus,
    name="offer_status",
    values_callable=lambda obj: [e.value for e in obj],
    native_enum=False,
    length=32,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BidWindowModel(Base):
    __tablename__ = "bid_windows"

    list_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    owner_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    opened_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    ttl_seconds: Mapped[int] = mapped_column(BigInteger, nullable=False)


class OfferModel(Base):
    __tablename__ = "bid_offers"

    # Surrogate key; its ordering is the insertion order used to break price ties
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    list_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    bidder_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[OfferStatus] = mapped_column(
        _offer_status_enum, nullable=False, default=OfferStatus.PENDING
    )
    chat_room_id: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        UniqueConstraint("list_id", "bidder_id", name="uq_bid_offers_list_bidder"),
        Index("ix_bid_offers_list_price", "list_id", "price"),
    )
