"""Unit tests for the chat gateway HTTP client, with the gateway mocked by respx."""
import json

import httpx
import pytest
import respx

from src.application.interfaces.notification_gateway import (
    GatewayResponseError,
    GatewayTransportError,
)
from src.infrastructure.external_services.chat_gateway_client import ChatGatewayClient

CREATE_ROOM_URL = "https://chat.test/room/create"
SEND_MESSAGE_URL = "https://chat.test/message/send"


def _make_client(http_client: httpx.AsyncClient) -> ChatGatewayClient:
    return ChatGatewayClient(
        http_client,
        create_room_url=CREATE_ROOM_URL,
        send_message_url=SEND_MESSAGE_URL,
        owner="bid-orchestrator",
    )


class TestCreateRoom:
    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_room_id_and_sends_expected_payload(self) -> None:
        route = respx.post(CREATE_ROOM_URL).mock(
            return_value=httpx.Response(200, json={"status": "ok", "result": {"_id": "room-1"}})
        )

        async with httpx.AsyncClient() as http_client:
            room = await _make_client(http_client).create_room(42, "Bidding price 100", "tok")

        assert room.room_id == "room-1"
        request = route.calls.last.request
        assert json.loads(request.content) == {
            "product": {"item_id": "42"},
            "message": {"text": "Bidding price 100"},
        }
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Owner"] == "bid-orchestrator"

    @pytest.mark.asyncio
    @respx.mock
    async def test_omits_authorization_without_token(self) -> None:
        route = respx.post(CREATE_ROOM_URL).mock(
            return_value=httpx.Response(200, json={"status": "ok", "result": {"_id": "room-1"}})
        )

        async with httpx.AsyncClient() as http_client:
            await _make_client(http_client).create_room(42, "Bidding price 100", None)

        assert "Authorization" not in route.calls.last.request.headers

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_2xx_raises_with_raw_body(self) -> None:
        respx.post(CREATE_ROOM_URL).mock(return_value=httpx.Response(403, text="token expired"))

        async with httpx.AsyncClient() as http_client:
            with pytest.raises(GatewayResponseError) as exc_info:
                await _make_client(http_client).create_room(42, "Bidding price 100", "tok")

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "token expired"

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_failure_raises_without_retry(self) -> None:
        route = respx.post(CREATE_ROOM_URL).mock(side_effect=httpx.ConnectError("refused"))

        async with httpx.AsyncClient() as http_client:
            with pytest.raises(GatewayTransportError) as exc_info:
                await _make_client(http_client).create_room(42, "Bidding price 100", None)

        assert "refused" in exc_info.value.message
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_room_id_is_an_error(self) -> None:
        respx.post(CREATE_ROOM_URL).mock(
            return_value=httpx.Response(200, json={"status": "ok", "result": {}})
        )

        async with httpx.AsyncClient() as http_client:
            with pytest.raises(GatewayResponseError):
                await _make_client(http_client).create_room(42, "Bidding price 100", None)

    @pytest.mark.asyncio
    @respx.mock
    @pytest.mark.parametrize(
        "body",
        [
            {"status": "error", "result": "quota exceeded"},
            {"status": "ok", "result": {"_id": 12345}},
            {"status": "ok", "result": None},
        ],
    )
    async def test_malformed_result_is_an_error(self, body: dict) -> None:
        respx.post(CREATE_ROOM_URL).mock(return_value=httpx.Response(200, json=body))

        async with httpx.AsyncClient() as http_client:
            with pytest.raises(GatewayResponseError):
                await _make_client(http_client).create_room(42, "Bidding price 100", None)


class TestSendMessage:
    @pytest.mark.asyncio
    @respx.mock
    async def test_sends_message_with_fresh_identifiers(self) -> None:
        route = respx.post(SEND_MESSAGE_URL).mock(
            return_value=httpx.Response(200, json={"status": "ok"})
        )

        async with httpx.AsyncClient() as http_client:
            client = _make_client(http_client)
            ack = await client.send_message("room-1", 7, "Bid accepted", "tok")
            await client.send_message("room-1", 7, "Bid accepted", "tok")

        assert ack.room_id == "room-1"
        first, second = (json.loads(c.request.content) for c in route.calls)
        assert first["text"] == "Bid accepted"
        assert first["sender_id"] == 7
        assert first["room_id"] == "room-1"
        assert first["unique_id"] != second["unique_id"]
        assert first["draft_id"] != second["draft_id"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_2xx_raises(self) -> None:
        respx.post(SEND_MESSAGE_URL).mock(return_value=httpx.Response(500, text="boom"))

        async with httpx.AsyncClient() as http_client:
            with pytest.raises(GatewayResponseError):
                await _make_client(http_client).send_message("room-1", 7, "Bid accepted", None)
