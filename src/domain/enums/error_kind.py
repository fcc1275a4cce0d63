from enum import Enum


class ErrorKind(str, Enum):
    """Category carried by every bidding error, surfaced to API callers."""

    VALIDATION = "validation"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    GATEWAY = "gateway"
    STORAGE = "storage"
