from src.domain.enums.error_kind import ErrorKind
from src.domain.enums.offer_status import OfferStatus
from src.domain.errors import BiddingError


# Mapping of valid transitions: from_status -> set of allowed to_statuses
VALID_TRANSITIONS: dict[OfferStatus, frozenset[OfferStatus]] = {
    OfferStatus.PENDING: frozenset({OfferStatus.ACCEPTED, OfferStatus.REJECTED}),
    # Terminal statuses have no valid outgoing transitions
    OfferStatus.ACCEPTED: frozenset(),
    OfferStatus.REJECTED: frozenset(),
}


class InvalidStatusTransitionError(BiddingError):
    """Raised when an offer is moved to a status it cannot reach."""

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, from_status: OfferStatus, to_status: OfferStatus) -> None:
        self.from_status = from_status
        self.to_status = to_status
        allowed = sorted(s.value for s in VALID_TRANSITIONS.get(from_status, frozenset()))
        super().__init__(
            f"Invalid transition from {from_status.value} to {to_status.value}. "
            f"Allowed transitions: {allowed}"
        )


class OfferStateMachine:
    """
    Validates status transitions for bidder offers.

    Re-applying the current status is always allowed so that repeated
    acceptance requests are harmless.
    """

    def can_transition(self, from_status: OfferStatus, to_status: OfferStatus) -> bool:
        if from_status == to_status:
            return True
        if from_status.is_terminal:
            return False
        return to_status in VALID_TRANSITIONS.get(from_status, frozenset())

    def validate_transition(self, from_status: OfferStatus, to_status: OfferStatus) -> None:
        """Raise InvalidStatusTransitionError if the transition is not permitted."""
        if not self.can_transition(from_status, to_status):
            raise InvalidStatusTransitionError(from_status, to_status)

    def get_allowed_transitions(self, from_status: OfferStatus) -> frozenset[OfferStatus]:
        return VALID_TRANSITIONS.get(from_status, frozenset())
