"""
FastAPI dependency injection wiring.

Each dependency function returns a fully-constructed object with its
collaborators injected so the route handlers stay thin. Shared resources
(session factory, HTTP client, event publisher) are created once in
``create_app`` and read from ``app.state``.
"""
from collections.abc import AsyncGenerator

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.bid_window_repository import BidWindowRepository
from src.application.interfaces.event_publisher import EventPublisher
from src.application.interfaces.notification_gateway import NotificationGateway
from src.application.interfaces.offer_ledger import OfferLedger
from src.application.use_cases.get_bid_window import GetBidWindow
from src.application.use_cases.list_ranked_offers import ListRankedOffers
from src.application.use_cases.open_bid_window import OpenBidWindow
from src.application.use_cases.submit_offer import SubmitOffer
from src.application.use_cases.update_offer_status import UpdateOfferStatus
from src.config import Settings
from src.infrastructure.database.connection import get_db_session
from src.infrastructure.database.repositories.bid_window_repository import (
    SqlAlchemyBidWindowRepository,
)
from src.infrastructure.database.repositories.offer_ledger import SqlAlchemyOfferLedger
from src.infrastructure.external_services.chat_gateway_client import ChatGatewayClient

_AUTH_SCHEMES = frozenset({"bearer", "token", "jwt"})


def strip_auth_scheme(authorization: str | None) -> str | None:
    """Return the raw token from an Authorization header, minus any "Bearer "-style prefix."""
    if not authorization or not authorization.strip():
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if not token:
        # A lone scheme word carries no credentials
        return None if scheme.lower() in _AUTH_SCHEMES else scheme
    return token.strip() or None


# ---- Low-level dependencies ------------------------------------------------

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async for session in get_db_session(request.app.state.session_factory):
        yield session


def get_bid_window_repo(session: AsyncSession = Depends(get_session)) -> BidWindowRepository:
    return SqlAlchemyBidWindowRepository(session)


def get_offer_ledger(session: AsyncSession = Depends(get_session)) -> OfferLedger:
    return SqlAlchemyOfferLedger(session)


def get_notification_gateway(request: Request) -> NotificationGateway:
    settings: Settings = request.app.state.settings
    return ChatGatewayClient(
        request.app.state.http_client,
        create_room_url=settings.chat_gateway_create_room_url,
        send_message_url=settings.chat_gateway_send_message_url,
        owner=settings.chat_gateway_owner,
    )


def get_event_publisher(request: Request) -> EventPublisher:
    return request.app.state.event_publisher


def get_auth_token(authorization: str | None = Header(default=None)) -> str | None:
    return strip_auth_scheme(authorization)


# ---- Use-case dependencies -------------------------------------------------

def get_open_bid_window_use_case(
    window_repo: BidWindowRepository = Depends(get_bid_window_repo),
    event_publisher: EventPublisher = Depends(get_event_publisher),
) -> OpenBidWindow:
    return OpenBidWindow(window_repo, event_publisher)


def get_bid_window_use_case(
    window_repo: BidWindowRepository = Depends(get_bid_window_repo),
) -> GetBidWindow:
    return GetBidWindow(window_repo)


def get_submit_offer_use_case(
    ledger: OfferLedger = Depends(get_offer_ledger),
    gateway: NotificationGateway = Depends(get_notification_gateway),
    event_publisher: EventPublisher = Depends(get_event_publisher),
) -> SubmitOffer:
    return SubmitOffer(ledger, gateway, event_publisher)


def get_update_offer_status_use_case(
    ledger: OfferLedger = Depends(get_offer_ledger),
    window_repo: BidWindowRepository = Depends(get_bid_window_repo),
    gateway: NotificationGateway = Depends(get_notification_gateway),
    event_publisher: EventPublisher = Depends(get_event_publisher),
) -> UpdateOfferStatus:
    return UpdateOfferStatus(ledger, window_repo, gateway, event_publisher)


def get_list_ranked_offers_use_case(
    ledger: OfferLedger = Depends(get_offer_ledger),
) -> ListRankedOffers:
    return ListRankedOffers(ledger)
