"""Channel Dispatch — resolves a session's client and delegates one channel operation.

Invariants:
    - Every public method runs inside _fault_boundary: GatewayError passes through,
      anything else becomes ClientOperationError with the original message text
    - A chat that is missing or lacks is_channel raises ChannelNotFoundError
      and no channel method is called afterwards
    - Unknown updateType / action raise 400 errors before any handle method runs
    - Results are returned verbatim; the route layer builds the envelope

Design Decisions:
    - Explicit dicts for updateType / action routing: every mapping visible in one place
      (ADR: no getattr magic)
    - Registry injected through the constructor, never imported (ADR: testable with fakes)
"""

import logging
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from channel_gateway.core.domain_types import (
    AdminAction, ChannelId, SessionId, UpdateType,
    parse_admin_action, parse_update_type,
)
from channel_gateway.core.errors import (
    ChannelNotFoundError, ClientOperationError, ErrorContext, GatewayError,
    InvalidAdminActionError, InvalidUpdateTypeError, SessionUnavailableError,
)
from channel_gateway.core.handle_protocols import (
    ChannelHandle, ClientHandle, SessionRegistry,
)

logger = logging.getLogger(__name__)

# ADR: every mapping explicit — adding an update type requires editing this dict
_UPDATE_SETTERS: dict[UpdateType, Callable[[ChannelHandle, Any], Awaitable[Any]]] = {
    UpdateType.SUBJECT: lambda ch, value: ch.set_subject(value),
    UpdateType.DESCRIPTION: lambda ch, value: ch.set_description(value),
    UpdateType.PROFILE_PICTURE: lambda ch, value: ch.set_profile_picture(value),
    UpdateType.REACTION_SETTING: lambda ch, value: ch.set_reaction_setting(value),
}

_ADMIN_ACTIONS: dict[
    AdminAction, Callable[[ChannelHandle, str | None, dict | None], Awaitable[Any]]
] = {
    AdminAction.INVITE: lambda ch, user_id, options: ch.send_channel_admin_invite(
        user_id, options,
    ),
    AdminAction.ACCEPT: lambda ch, user_id, options: ch.accept_channel_admin_invite(),
    AdminAction.REVOKE: lambda ch, user_id, options: ch.revoke_channel_admin_invite(user_id),
    AdminAction.DEMOTE: lambda ch, user_id, options: ch.demote_channel_admin(user_id),
}


class ChannelDispatcher:
    """One async method per channel operation. Stateless apart from the registry."""

    def __init__(self, registry: SessionRegistry):
        self._registry = registry

    # ─── Client-level operations ────────────────────────────────

    async def get_all_channels(self, session_id: SessionId) -> Any:
        async with self._fault_boundary("getAllChannels", session_id):
            client = self._client(session_id)
            return await client.get_channels()

    async def create_channel(
        self, session_id: SessionId, title: str | None, options: dict | None,
    ) -> Any:
        async with self._fault_boundary("createChannel", session_id):
            client = self._client(session_id)
            return await client.create_channel(title, options)

    async def subscribe_to_channel(
        self, session_id: SessionId, channel_id: ChannelId,
    ) -> Any:
        async with self._fault_boundary("subscribeToChannel", session_id, channel_id):
            client = self._client(session_id)
            return await client.subscribe_to_channel(channel_id)

    async def unsubscribe_from_channel(
        self, session_id: SessionId, channel_id: ChannelId, options: dict | None,
    ) -> Any:
        async with self._fault_boundary("unsubscribeFromChannel", session_id, channel_id):
            client = self._client(session_id)
            return await client.unsubscribe_from_channel(channel_id, options)

    async def search_channels(
        self, session_id: SessionId, search_options: dict | None,
    ) -> Any:
        async with self._fault_boundary("searchChannels", session_id):
            client = self._client(session_id)
            return await client.search_channels(search_options)

    async def get_channel_by_invite_code(
        self, session_id: SessionId, invite_code: str,
    ) -> Any:
        async with self._fault_boundary("getChannelByInviteCode", session_id):
            client = self._client(session_id)
            return await client.get_channel_by_invite_code(invite_code)

    # ─── Channel-scoped operations ──────────────────────────────

    async def get_channel_info(
        self, session_id: SessionId, channel_id: ChannelId,
    ) -> ChannelHandle:
        async with self._fault_boundary("getChannelInfo", session_id, channel_id):
            return await self._channel(session_id, channel_id)

    async def delete_channel(
        self, session_id: SessionId, channel_id: ChannelId,
    ) -> Any:
        async with self._fault_boundary("deleteChannel", session_id, channel_id):
            channel = await self._channel(session_id, channel_id)
            return await channel.delete_channel()

    async def send_channel_message(
        self, session_id: SessionId, channel_id: ChannelId,
        content: Any, options: dict | None,
    ) -> Any:
        async with self._fault_boundary("sendChannelMessage", session_id, channel_id):
            channel = await self._channel(session_id, channel_id)
            return await channel.send_message(content, options)

    async def update_channel_info(
        self, session_id: SessionId, channel_id: ChannelId,
        update_type: str | None, value: Any,
    ) -> Any:
        """Route updateType to the matching setter."""
        async with self._fault_boundary("updateChannelInfo", session_id, channel_id):
            channel = await self._channel(session_id, channel_id)
            setter = _UPDATE_SETTERS.get(parse_update_type(update_type))
            if setter is None:
                raise InvalidUpdateTypeError(
                    update_type,
                    ErrorContext(
                        session_id=session_id, operation="updateChannelInfo",
                        channel_id=channel_id,
                    ),
                )
            return await setter(channel, value)

    async def manage_channel_admins(
        self, session_id: SessionId, channel_id: ChannelId,
        action: str | None, user_id: str | None, options: dict | None,
    ) -> Any:
        """Route action to the matching admin call.

        accept takes no arguments (the invite is addressed to this session);
        invite forwards options, revoke and demote only the user id.
        """
        async with self._fault_boundary("manageChannelAdmins", session_id, channel_id):
            channel = await self._channel(session_id, channel_id)
            handler = _ADMIN_ACTIONS.get(parse_admin_action(action))
            if handler is None:
                raise InvalidAdminActionError(
                    action,
                    ErrorContext(
                        session_id=session_id, operation="manageChannelAdmins",
                        channel_id=channel_id,
                    ),
                )
            return await handler(channel, user_id, options)

    async def transfer_channel_ownership(
        self, session_id: SessionId, channel_id: ChannelId,
        new_owner_id: str | None, options: dict | None,
    ) -> Any:
        async with self._fault_boundary(
            "transferChannelOwnership", session_id, channel_id,
        ):
            channel = await self._channel(session_id, channel_id)
            return await channel.transfer_channel_ownership(new_owner_id, options)

    async def get_channel_subscribers(
        self, session_id: SessionId, channel_id: ChannelId, limit: int | None,
    ) -> Any:
        async with self._fault_boundary("getChannelSubscribers", session_id, channel_id):
            channel = await self._channel(session_id, channel_id)
            return await channel.get_subscribers(limit)

    async def fetch_channel_messages(
        self, session_id: SessionId, channel_id: ChannelId,
        search_options: dict | None,
    ) -> Any:
        async with self._fault_boundary("fetchChannelMessages", session_id, channel_id):
            channel = await self._channel(session_id, channel_id)
            return await channel.fetch_messages(search_options)

    async def mute_channel(
        self, session_id: SessionId, channel_id: ChannelId, mute: bool,
    ) -> Any:
        async with self._fault_boundary("muteChannel", session_id, channel_id):
            channel = await self._channel(session_id, channel_id)
            if mute:
                return await channel.mute()
            return await channel.unmute()

    # ─── Resolution helpers ─────────────────────────────────────

    def _client(self, session_id: SessionId) -> ClientHandle:
        client = self._registry.get(session_id)
        if client is None:
            raise SessionUnavailableError(
                session_id, ErrorContext(session_id=session_id),
            )
        return client

    async def _channel(
        self, session_id: SessionId, channel_id: ChannelId,
    ) -> ChannelHandle:
        """Resolve channel_id to a chat that carries the channel flag."""
        client = self._client(session_id)
        channel = await client.get_chat_by_id(channel_id)
        if not channel or not getattr(channel, "is_channel", False):
            raise ChannelNotFoundError(
                ErrorContext(session_id=session_id, channel_id=channel_id),
            )
        return channel

    @asynccontextmanager
    async def _fault_boundary(
        self, operation: str, session_id: SessionId,
        channel_id: ChannelId | None = None,
    ):
        """Map every failure inside an operation to a GatewayError."""
        try:
            yield
        except GatewayError as e:
            e.context.operation = e.context.operation or operation
            raise
        except Exception as e:
            error = ClientOperationError(
                str(e),
                ErrorContext(
                    session_id=session_id, operation=operation,
                    channel_id=channel_id,
                    debug_info={"exception_type": type(e).__name__},
                ),
            )
            logger.error(
                f"{operation} failed: {e}", exc_info=True, extra=error.log_extra(),
            )
            raise error from e
