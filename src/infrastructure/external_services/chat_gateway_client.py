"""HTTP client for the external chat gateway."""
from typing import Any
from uuid import uuid4

import httpx
import structlog

from src.application.interfaces.notification_gateway import (
    ChatRoom,
    GatewayResponseError,
    GatewayTransportError,
    MessageAck,
    NotificationGateway,
)

logger = structlog.get_logger(__name__)


class ChatGatewayClient(NotificationGateway):
    """
    Thin wrapper around the chat gateway's room and message endpoints.

    Every call is a single attempt. The caller's bearer token is forwarded
    as-is; a missing token results in an unauthenticated request.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        create_room_url: str,
        send_message_url: str,
        owner: str,
    ) -> None:
        self._client = client
        self._create_room_url = create_room_url
        self._send_message_url = send_message_url
        self._owner = owner

    def _headers(self, auth_token: str | None) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Owner": self._owner,
        }
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        return headers

    async def _post(self, url: str, payload: dict[str, Any], auth_token: str | None) -> dict[str, Any]:
        try:
            response = await self._client.post(url, json=payload, headers=self._headers(auth_token))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "chat_gateway_request_failed",
                url=url,
                status_code=exc.response.status_code,
                response=exc.response.text,
            )
            raise GatewayResponseError(exc.response.status_code, exc.response.text) from exc
        except httpx.RequestError as exc:
            logger.error("chat_gateway_connection_failed", url=url, error=str(exc))
            raise GatewayTransportError(f"Failed to reach chat gateway: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    async def create_room(self, list_id: int, message: str, auth_token: str | None) -> ChatRoom:
        """
        POST create-room → {"status": "...", "result": {"_id": "..."}}
        """
        payload = {
            "product": {"item_id": str(list_id)},
            "message": {"text": message},
        }
        data = await self._post(self._create_room_url, payload, auth_token)

        result = data.get("result")
        room_id = result.get("_id") if isinstance(result, dict) else None
        if not isinstance(room_id, str) or not room_id:
            logger.error("chat_room_missing_id", list_id=list_id, response=data)
            raise GatewayResponseError(200, f"Chat gateway returned no room id: {data}")

        logger.info("chat_room_created", list_id=list_id, room_id=room_id)
        return ChatRoom(room_id=room_id, status=data.get("status"))

    async def send_message(
        self,
        room_id: str,
        sender_id: int,
        message: str,
        auth_token: str | None,
    ) -> MessageAck:
        payload = {
            "text": message,
            "sender_id": sender_id,
            "room_id": room_id,
            "unique_id": uuid4().hex,
            "draft_id": uuid4().hex,
        }
        data = await self._post(self._send_message_url, payload, auth_token)

        logger.info("chat_message_sent", room_id=room_id, sender_id=sender_id)
        return MessageAck(room_id=room_id, status=data.get("status"))
