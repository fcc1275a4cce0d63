"""
Error taxonomy for the bidding workflow.

Every error carries an explicit ``ErrorKind`` and a human readable message;
the API layer maps the kind to an HTTP status.
"""
from src.domain.enums.error_kind import ErrorKind


class BiddingError(Exception):
    """Base class for all bidding errors."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidBidError(BiddingError):
    kind = ErrorKind.VALIDATION


class DuplicateWindowError(BiddingError):
    kind = ErrorKind.DUPLICATE

    def __init__(self, list_id: int) -> None:
        self.list_id = list_id
        super().__init__(f"Bid window for listing {list_id} already exists.")


class BidWindowNotFoundError(BiddingError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, list_id: int) -> None:
        self.list_id = list_id
        super().__init__(f"Bid window for listing {list_id} not found.")


class DuplicateOfferError(BiddingError):
    kind = ErrorKind.DUPLICATE

    def __init__(self, list_id: int, bidder_id: int) -> None:
        self.list_id = list_id
        self.bidder_id = bidder_id
        super().__init__(f"Bidder {bidder_id} already holds an offer on listing {list_id}.")


class OfferNotFoundError(BiddingError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, list_id: int, bidder_id: int) -> None:
        self.list_id = list_id
        self.bidder_id = bidder_id
        super().__init__(f"Offer from bidder {bidder_id} on listing {list_id} not found.")
