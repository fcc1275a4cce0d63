"""
RabbitMQ event publisher.

Uses pika in a thread-pool executor so blocking I/O doesn't stall the
asyncio event loop. A new connection is opened per publish call.
"""
import asyncio
import json
from functools import partial

import pika
import structlog

from src.application.interfaces.event_publisher import EventPublisher
from src.domain.events.domain_events import (
    BidWindowOpenedEvent,
    DomainEvent,
    OfferStatusChangedEvent,
    OfferSubmittedEvent,
)

logger = structlog.get_logger(__name__)

EXCHANGE_NAME = "bidding.events"


def _event_to_routing_key(event: DomainEvent) -> str:
    if isinstance(event, BidWindowOpenedEvent):
        return "bid.window.opened"
    if isinstance(event, OfferSubmittedEvent):
        return "bid.offer.submitted"
    if isinstance(event, OfferStatusChangedEvent):
        return f"bid.offer.{event.to_status.value}"
    return "event.unknown"


def _serialise_event(event: DomainEvent) -> str:
    payload: dict = {  # type: ignore[type-arg]
        "event_type": _event_to_routing_key(event),
        "event_id": str(event.event_id),
        "occurred_at": event.occurred_at.isoformat(),
    }

    if isinstance(event, BidWindowOpenedEvent):
        payload.update(
            {
                "list_id": event.list_id,
                "owner_id": event.owner_id,
                "ttl_seconds": event.ttl_seconds,
            }
        )
    elif isinstance(event, OfferSubmittedEvent):
        payload.update(
            {
                "list_id": event.list_id,
                "bidder_id": event.bidder_id,
                "price": event.price,
                "chat_room_id": event.chat_room_id,
            }
        )
    elif isinstance(event, OfferStatusChangedEvent):
        payload.update(
            {
                "list_id": event.list_id,
                "bidder_id": event.bidder_id,
                "from_status": event.from_status.value,
                "to_status": event.to_status.value,
            }
        )

    return json.dumps(payload, default=str)


def _blocking_publish(rabbitmq_url: str, routing_key: str, body: str) -> None:
    connection = pika.BlockingConnection(pika.URLParameters(rabbitmq_url))
    try:
        channel = connection.channel()
        channel.exchange_declare(
            exchange=EXCHANGE_NAME, exchange_type="topic", durable=True
        )
        channel.basic_publish(
            exchange=EXCHANGE_NAME,
            routing_key=routing_key,
            body=body.encode(),
            properties=pika.BasicProperties(
                delivery_mode=pika.DeliveryMode.Persistent,
                content_type="application/json",
            ),
        )
    finally:
        connection.close()


class RabbitMQPublisher(EventPublisher):
    """Publishes bidding events to a RabbitMQ topic exchange."""

    def __init__(self, rabbitmq_url: str) -> None:
        self._url = rabbitmq_url

    async def publish(self, event: DomainEvent) -> None:
        routing_key = _event_to_routing_key(event)
        body = _serialise_event(event)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(_blocking_publish, self._url, routing_key, body),
            )
            logger.debug("event_published", routing_key=routing_key, event_id=str(event.event_id))
        except Exception as exc:
            # Publishing is best-effort; the request that produced the event has already succeeded.
            logger.error(
                "failed_to_publish_event",
                routing_key=routing_key,
                error=str(exc),
            )
