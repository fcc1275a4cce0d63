from enum import Enum


class OfferStatus(str, Enum):
    """All possible states of a bidder's offer."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        """Terminal statuses cannot be transitioned out of."""
        return self in (OfferStatus.ACCEPTED, OfferStatus.REJECTED)
