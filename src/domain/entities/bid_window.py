from dataclasses import dataclass, field
from datetime import datetime, timezone

from src.domain.events.domain_events import BidWindowOpenedEvent, DomainEvent


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BidWindow:
    """
    The time-bounded period during which a listing accepts competing offers.

    A window is never mutated once opened and never deleted; expiry is derived
    from ``opened_at + ttl_seconds`` rather than enforced by removal.
    """

    list_id: int
    owner_id: int
    ttl_seconds: int
    opened_at: datetime = field(default_factory=_utcnow)

    _events: list[DomainEvent] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def open(cls, *, list_id: int, owner_id: int, ttl_seconds: int) -> "BidWindow":
        window = cls(list_id=list_id, owner_id=owner_id, ttl_seconds=ttl_seconds)
        window._events.append(
            BidWindowOpenedEvent(list_id=list_id, owner_id=owner_id, ttl_seconds=ttl_seconds)
        )
        return window

    def remaining_seconds(self, now: datetime | None = None) -> int:
        """Whole seconds left in the window; negative once it has expired."""
        now = now or _utcnow()
        return int(self.opened_at.timestamp()) + self.ttl_seconds - int(now.timestamp())

    def is_open(self, now: datetime | None = None) -> bool:
        return self.remaining_seconds(now) >= 0

    def collect_events(self) -> list[DomainEvent]:
        """Return pending events and clear the internal buffer."""
        events = list(self._events)
        self._events.clear()
        return events
