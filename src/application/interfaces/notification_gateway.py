from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.domain.enums.error_kind import ErrorKind
from src.domain.errors import BiddingError


class GatewayError(BiddingError):
    """The chat service could not be reached or rejected the request."""

    kind = ErrorKind.GATEWAY


class GatewayResponseError(GatewayError):
    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(body or f"Chat gateway returned {status_code}")


class GatewayTransportError(GatewayError):
    pass


@dataclass
class ChatRoom:
    room_id: str
    status: str | None = None


@dataclass
class MessageAck:
    room_id: str
    status: str | None = None


class NotificationGateway(ABC):
    """Port for the external chat service used to notify bidders and sellers."""

    @abstractmethod
    async def create_room(self, list_id: int, message: str, auth_token: str | None) -> ChatRoom:
        ...

    @abstractmethod
    async def send_message(
        self,
        room_id: str,
        sender_id: int,
        message: str,
        auth_token: str | None,
    ) -> MessageAck:
        ...
