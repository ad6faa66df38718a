"""Bridge Client — ClientHandle/ChannelHandle adapters over the messaging sidecar.

The messaging client library runs in a Node sidecar (it drives a browser
session). Each call here becomes one POST to the sidecar:

    POST {base_url}/sessions/{session_id}/call
    {"target": "client" | "chat", "chatId": ..., "method": "getChatById", "args": [...]}
    -> 200 {"result": ...} | 4xx/5xx {"error": "..."}

Invariants:
    - Python method names map 1:1 onto the library's camelCase names
    - Chat results are wrapped in BridgeChannel; is_channel comes from payload["isChannel"]
    - Every transport/HTTP failure raises BridgeError carrying the upstream message
    - No retries: timeout/retry policy belongs to the library behind the sidecar

Design Decisions:
    - One shared httpx.AsyncClient per process (connection pooling), owned by lifespan
    - Thin wrapper over raw client: isolates wire format from the dispatcher (ADR: single responsibility)
"""

import logging
from typing import Any

import httpx

from channel_gateway.config import Settings
from channel_gateway.core.domain_types import ChannelId, SessionId
from channel_gateway.infrastructure.session_registry import InMemorySessionRegistry

logger = logging.getLogger(__name__)


class BridgeError(Exception):
    """Sidecar call failed. str(e) is the message surfaced to API clients."""

    def __init__(self, message: str, method: str, status_code: int | None = None):
        super().__init__(message)
        self.method = method
        self.status_code = status_code


class BridgeTransport:
    """Posts one library call to the sidecar and unwraps {"result": ...}."""

    def __init__(self, http: httpx.AsyncClient, session_id: SessionId):
        self._http = http
        self.session_id = session_id

    async def call(
        self, method: str, *args: Any,
        target: str = "client", chat_id: str | None = None,
    ) -> Any:
        body: dict[str, Any] = {"target": target, "method": method, "args": list(args)}
        if chat_id is not None:
            body["chatId"] = chat_id
        try:
            response = await self._http.post(
                f"/sessions/{self.session_id}/call", json=body,
            )
        except httpx.TimeoutException as e:
            raise BridgeError(f"Bridge timeout calling {method}", method) from e
        except httpx.HTTPError as e:
            raise BridgeError(str(e) or type(e).__name__, method) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                f"Bridge call {method} failed: {message}",
                extra={
                    "session_id": self.session_id, "bridge_method": method,
                    "status_code": response.status_code,
                },
            )
            raise BridgeError(message, method, response.status_code)
        return response.json().get("result")


def _error_message(response: httpx.Response) -> str:
    """Extract the sidecar's error text, falling back to the status line."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("error", "message"):
            if data.get(key):
                return str(data[key])
    return response.text or f"Bridge returned HTTP {response.status_code}"


class BridgeChannel:
    """ChannelHandle backed by a chat payload and the sidecar."""

    def __init__(self, transport: BridgeTransport, data: dict[str, Any]):
        self._transport = transport
        self.data = data
        self.id = _serialized_id(data.get("id"))
        self.is_channel = bool(data.get("isChannel"))

    def as_dict(self) -> dict[str, Any]:
        return self.data

    async def _call(self, method: str, *args: Any) -> Any:
        return await self._transport.call(
            method, *args, target="chat", chat_id=self.id,
        )

    async def delete_channel(self) -> Any:
        return await self._call("deleteChannel")

    async def send_message(self, content: Any, options: dict | None = None) -> Any:
        return await self._call("sendMessage", content, options or {})

    async def set_subject(self, value: Any) -> Any:
        return await self._call("setSubject", value)

    async def set_description(self, value: Any) -> Any:
        return await self._call("setDescription", value)

    async def set_profile_picture(self, value: Any) -> Any:
        return await self._call("setProfilePicture", value)

    async def set_reaction_setting(self, value: Any) -> Any:
        return await self._call("setReactionSetting", value)

    async def send_channel_admin_invite(
        self, user_id: str | None, options: dict | None = None,
    ) -> Any:
        return await self._call("sendChannelAdminInvite", user_id, options or {})

    async def accept_channel_admin_invite(self) -> Any:
        return await self._call("acceptChannelAdminInvite")

    async def revoke_channel_admin_invite(self, user_id: str | None) -> Any:
        return await self._call("revokeChannelAdminInvite", user_id)

    async def demote_channel_admin(self, user_id: str | None) -> Any:
        return await self._call("demoteChannelAdmin", user_id)

    async def transfer_channel_ownership(
        self, new_owner_id: str | None, options: dict | None = None,
    ) -> Any:
        return await self._call(
            "transferChannelOwnership", new_owner_id, options or {},
        )

    async def get_subscribers(self, limit: int | None = None) -> Any:
        return await self._call("getSubscribers", limit)

    async def fetch_messages(self, search_options: dict | None = None) -> Any:
        return await self._call("fetchMessages", search_options or {})

    async def mute(self) -> Any:
        return await self._call("mute")

    async def unmute(self) -> Any:
        return await self._call("unmute")


def _serialized_id(raw: Any) -> str | None:
    """Chat ids arrive as {"_serialized": "..."} or as a plain string."""
    if isinstance(raw, dict):
        return raw.get("_serialized")
    return raw


class BridgeClient:
    """ClientHandle for one sidecar session."""

    def __init__(self, http: httpx.AsyncClient, session_id: SessionId):
        self._transport = BridgeTransport(http, session_id)
        self.session_id = session_id

    async def get_chat_by_id(self, chat_id: ChannelId) -> BridgeChannel | None:
        data = await self._transport.call("getChatById", chat_id)
        if not data:
            return None
        return BridgeChannel(self._transport, data)

    async def get_channels(self) -> Any:
        return await self._transport.call("getChannels")

    async def create_channel(self, title: str | None, options: dict | None = None) -> Any:
        return await self._transport.call("createChannel", title, options or {})

    async def subscribe_to_channel(self, channel_id: ChannelId) -> Any:
        return await self._transport.call("subscribeToChannel", channel_id)

    async def unsubscribe_from_channel(
        self, channel_id: ChannelId, options: dict | None = None,
    ) -> Any:
        return await self._transport.call(
            "unsubscribeFromChannel", channel_id, options or {},
        )

    async def search_channels(self, search_options: dict | None = None) -> Any:
        return await self._transport.call("searchChannels", search_options or {})

    async def get_channel_by_invite_code(self, invite_code: str) -> Any:
        return await self._transport.call("getChannelByInviteCode", invite_code)


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Shared AsyncClient pointed at the sidecar."""
    return httpx.AsyncClient(
        base_url=settings.bridge_url,
        timeout=settings.bridge_timeout_seconds,
    )


def build_bridge_registry(
    settings: Settings, http: httpx.AsyncClient,
) -> InMemorySessionRegistry:
    """Register one BridgeClient per configured session id."""
    registry = InMemorySessionRegistry()
    for session_id in settings.session_ids:
        registry.add(SessionId(session_id), BridgeClient(http, SessionId(session_id)))
    logger.info(f"Registered {len(registry)} bridge session(s)")
    return registry
