"""Unit tests for the bidding use cases; all dependencies are mocked."""
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.interfaces.notification_gateway import (
    ChatRoom,
    GatewayResponseError,
    GatewayTransportError,
    MessageAck,
)
from src.application.use_cases.get_bid_window import GetBidWindow
from src.application.use_cases.list_ranked_offers import (
    ListRankedOffers,
    ListRankedOffersInput,
)
from src.application.use_cases.open_bid_window import OpenBidWindow, OpenBidWindowInput
from src.application.use_cases.submit_offer import SubmitOffer, SubmitOfferInput
from src.application.use_cases.update_offer_status import (
    UpdateOfferStatus,
    UpdateOfferStatusInput,
)
from src.domain.entities.bid_window import BidWindow
from src.domain.entities.offer import Offer
from src.domain.enums.offer_status import OfferStatus
from src.domain.errors import (
    BidWindowNotFoundError,
    DuplicateOfferError,
    DuplicateWindowError,
    InvalidBidError,
    OfferNotFoundError,
)
from src.domain.state_machine.offer_state_machine import InvalidStatusTransitionError

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _make_window_repo(window: BidWindow | None = None) -> MagicMock:
    repo = MagicMock()
    repo.open = AsyncMock(side_effect=lambda w: w)
    repo.get = AsyncMock(return_value=window)
    return repo


def _make_ledger(offer: Offer | None = None) -> MagicMock:
    ledger = MagicMock()
    ledger.admit = AsyncMock(side_effect=lambda o: o)
    ledger.get = AsyncMock(return_value=offer)
    ledger.update_status = AsyncMock(
        side_effect=lambda list_id, bidder_id, status, expected_status=None: Offer(
            list_id=list_id,
            bidder_id=bidder_id,
            price=offer.price if offer else 0,
            chat_room_id=offer.chat_room_id if offer else "",
            status=status,
        )
    )
    ledger.rank = AsyncMock(return_value=[])
    ledger.count = AsyncMock(return_value=0)
    return ledger


def _make_gateway(room_id: str = "room-1") -> MagicMock:
    gateway = MagicMock()
    gateway.create_room = AsyncMock(return_value=ChatRoom(room_id=room_id, status="ok"))
    gateway.send_message = AsyncMock(return_value=MessageAck(room_id=room_id, status="ok"))
    return gateway


def _make_publisher() -> MagicMock:
    pub = MagicMock()
    pub.publish_many = AsyncMock()
    return pub


def _make_offer(status: OfferStatus = OfferStatus.PENDING) -> Offer:
    return Offer(
        id=1,
        list_id=42,
        bidder_id=9,
        price=100,
        chat_room_id="room-1",
        status=status,
    )


class TestOpenBidWindow:
    @pytest.mark.asyncio
    async def test_opens_window_and_publishes_event(self) -> None:
        repo = _make_window_repo()
        publisher = _make_publisher()
        use_case = OpenBidWindow(repo, publisher)

        window = await use_case.execute(
            OpenBidWindowInput(list_id=42, owner_id=7, ttl_seconds=3600)
        )

        assert window.list_id == 42
        assert window.owner_id == 7
        repo.open.assert_awaited_once()
        publisher.publish_many.assert_awaited_once()
        assert len(publisher.publish_many.await_args.args[0]) == 1

    @pytest.mark.asyncio
    async def test_duplicate_window_propagates(self) -> None:
        repo = _make_window_repo()
        repo.open = AsyncMock(side_effect=DuplicateWindowError(42))
        publisher = _make_publisher()
        use_case = OpenBidWindow(repo, publisher)

        with pytest.raises(DuplicateWindowError):
            await use_case.execute(OpenBidWindowInput(list_id=42, owner_id=7, ttl_seconds=3600))
        publisher.publish_many.assert_not_awaited()


class TestGetBidWindow:
    @pytest.mark.asyncio
    async def test_returns_remaining_seconds(self) -> None:
        window = BidWindow(list_id=42, owner_id=7, ttl_seconds=3600, opened_at=T0)
        use_case = GetBidWindow(
            _make_window_repo(window), clock=lambda: T0 + timedelta(seconds=100)
        )

        result = await use_case.execute(42)

        assert result.window is window
        assert result.remaining_seconds == 3500

    @pytest.mark.asyncio
    async def test_expired_window_has_negative_remaining(self) -> None:
        window = BidWindow(list_id=42, owner_id=7, ttl_seconds=10, opened_at=T0)
        use_case = GetBidWindow(
            _make_window_repo(window), clock=lambda: T0 + timedelta(seconds=25)
        )

        result = await use_case.execute(42)

        assert result.remaining_seconds == -15

    @pytest.mark.asyncio
    async def test_raises_window_not_found(self) -> None:
        use_case = GetBidWindow(_make_window_repo(None))
        with pytest.raises(BidWindowNotFoundError):
            await use_case.execute(42)


class TestSubmitOffer:
    @pytest.mark.asyncio
    async def test_creates_room_then_admits_offer(self) -> None:
        ledger = _make_ledger()
        gateway = _make_gateway("room-1")
        publisher = _make_publisher()
        use_case = SubmitOffer(ledger, gateway, publisher)

        offer = await use_case.execute(
            SubmitOfferInput(list_id=42, bidder_id=9, price=100, auth_token="tok")
        )

        gateway.create_room.assert_awaited_once_with(42, "Bidding price 100", "tok")
        ledger.admit.assert_awaited_once()
        assert offer.chat_room_id == "room-1"
        assert offer.status == OfferStatus.PENDING
        publisher.publish_many.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_gateway_failure_persists_nothing(self) -> None:
        ledger = _make_ledger()
        gateway = _make_gateway()
        gateway.create_room = AsyncMock(side_effect=GatewayResponseError(502, "bad gateway"))
        publisher = _make_publisher()
        use_case = SubmitOffer(ledger, gateway, publisher)

        with pytest.raises(GatewayResponseError):
            await use_case.execute(SubmitOfferInput(list_id=42, bidder_id=9, price=100))

        ledger.admit.assert_not_awaited()
        publisher.publish_many.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_offer_leaves_room_in_place(self) -> None:
        ledger = _make_ledger()
        ledger.admit = AsyncMock(side_effect=DuplicateOfferError(42, 9))
        gateway = _make_gateway()
        use_case = SubmitOffer(ledger, gateway, _make_publisher())

        with pytest.raises(DuplicateOfferError):
            await use_case.execute(SubmitOfferInput(list_id=42, bidder_id=9, price=100))

        assert [c[0] for c in gateway.method_calls] == ["create_room"]

    @pytest.mark.asyncio
    async def test_rejects_non_positive_price_before_calling_gateway(self) -> None:
        gateway = _make_gateway()
        use_case = SubmitOffer(_make_ledger(), gateway, _make_publisher())

        with pytest.raises(InvalidBidError):
            await use_case.execute(SubmitOfferInput(list_id=42, bidder_id=9, price=0))
        gateway.create_room.assert_not_awaited()


class TestUpdateOfferStatus:
    @pytest.mark.asyncio
    async def test_accepts_offer_and_notifies_room(self) -> None:
        ledger = _make_ledger(_make_offer())
        window = BidWindow(list_id=42, owner_id=7, ttl_seconds=3600, opened_at=T0)
        gateway = _make_gateway()
        publisher = _make_publisher()
        use_case = UpdateOfferStatus(ledger, _make_window_repo(window), gateway, publisher)

        result = await use_case.execute(
            UpdateOfferStatusInput(
                list_id=42, bidder_id=9, status=OfferStatus.ACCEPTED, auth_token="tok"
            )
        )

        assert result.changed is True
        assert result.notified is True
        assert result.offer.status == OfferStatus.ACCEPTED
        ledger.update_status.assert_awaited_once_with(
            42, 9, OfferStatus.ACCEPTED, expected_status=OfferStatus.PENDING
        )
        gateway.send_message.assert_awaited_once_with("room-1", 7, "Bid accepted", "tok")
        publisher.publish_many.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_raises_offer_not_found(self) -> None:
        gateway = _make_gateway()
        use_case = UpdateOfferStatus(
            _make_ledger(None), _make_window_repo(), gateway, _make_publisher()
        )

        with pytest.raises(OfferNotFoundError):
            await use_case.execute(
                UpdateOfferStatusInput(list_id=42, bidder_id=9, status=OfferStatus.ACCEPTED)
            )
        gateway.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reaccepting_is_noop(self) -> None:
        ledger = _make_ledger(_make_offer(OfferStatus.ACCEPTED))
        gateway = _make_gateway()
        use_case = UpdateOfferStatus(ledger, _make_window_repo(), gateway, _make_publisher())

        result = await use_case.execute(
            UpdateOfferStatusInput(list_id=42, bidder_id=9, status=OfferStatus.ACCEPTED)
        )

        assert result.changed is False
        assert result.offer.status == OfferStatus.ACCEPTED
        ledger.update_status.assert_not_awaited()
        gateway.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_raises_invalid_transition(self) -> None:
        ledger = _make_ledger(_make_offer(OfferStatus.ACCEPTED))
        use_case = UpdateOfferStatus(
            ledger, _make_window_repo(), _make_gateway(), _make_publisher()
        )

        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(
                UpdateOfferStatusInput(list_id=42, bidder_id=9, status=OfferStatus.PENDING)
            )
        ledger.update_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_window_fails_after_status_is_written(self) -> None:
        ledger = _make_ledger(_make_offer())
        gateway = _make_gateway()
        use_case = UpdateOfferStatus(ledger, _make_window_repo(None), gateway, _make_publisher())

        with pytest.raises(BidWindowNotFoundError):
            await use_case.execute(
                UpdateOfferStatusInput(list_id=42, bidder_id=9, status=OfferStatus.ACCEPTED)
            )
        ledger.update_status.assert_awaited_once()
        gateway.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_notification_failure_keeps_acceptance(self) -> None:
        ledger = _make_ledger(_make_offer())
        window = BidWindow(list_id=42, owner_id=7, ttl_seconds=3600, opened_at=T0)
        gateway = _make_gateway()
        gateway.send_message = AsyncMock(side_effect=GatewayTransportError("timed out"))
        use_case = UpdateOfferStatus(ledger, _make_window_repo(window), gateway, _make_publisher())

        result = await use_case.execute(
            UpdateOfferStatusInput(list_id=42, bidder_id=9, status=OfferStatus.ACCEPTED)
        )

        assert result.changed is True
        assert result.notified is False
        assert result.offer.status == OfferStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_losing_conflicting_write_raises_invalid_transition(self) -> None:
        ledger = _make_ledger()
        ledger.get = AsyncMock(
            side_effect=[_make_offer(), _make_offer(OfferStatus.ACCEPTED)]
        )
        ledger.update_status = AsyncMock(return_value=None)
        gateway = _make_gateway()
        publisher = _make_publisher()
        use_case = UpdateOfferStatus(ledger, _make_window_repo(), gateway, publisher)

        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(
                UpdateOfferStatusInput(list_id=42, bidder_id=9, status=OfferStatus.REJECTED)
            )
        gateway.send_message.assert_not_awaited()
        publisher.publish_many.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_losing_identical_write_is_noop(self) -> None:
        ledger = _make_ledger()
        ledger.get = AsyncMock(
            side_effect=[_make_offer(), _make_offer(OfferStatus.ACCEPTED)]
        )
        ledger.update_status = AsyncMock(return_value=None)
        gateway = _make_gateway()
        use_case = UpdateOfferStatus(ledger, _make_window_repo(), gateway, _make_publisher())

        result = await use_case.execute(
            UpdateOfferStatusInput(list_id=42, bidder_id=9, status=OfferStatus.ACCEPTED)
        )

        assert result.changed is False
        assert result.offer.status == OfferStatus.ACCEPTED
        gateway.send_message.assert_not_awaited()


class TestListRankedOffers:
    @pytest.mark.asyncio
    async def test_returns_ranked_offers_and_count(self) -> None:
        offers = [_make_offer(), _make_offer()]
        ledger = _make_ledger()
        ledger.rank = AsyncMock(return_value=offers)
        ledger.count = AsyncMock(return_value=12)
        use_case = ListRankedOffers(ledger)

        result = await use_case.execute(ListRankedOffersInput(list_id=42, limit=2))

        ledger.rank.assert_awaited_once_with(42, 2)
        ledger.count.assert_awaited_once_with(42)
        assert result.count == 12
        assert result.offers == offers
