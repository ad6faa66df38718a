"""Boundary Protocols — contracts for the messaging-client collaborators.

Invariants:
    - The dispatcher only ever talks to these Protocols, never a concrete client
    - All handle methods are async because every implementation does network IO
    - Return values are opaque to the gateway and forwarded verbatim

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Registry lookup is sync: it is a local map, only the handles do IO
"""

from typing import Any, Protocol

from channel_gateway.core.domain_types import ChannelId, SessionId


class ChannelHandle(Protocol):
    """One resolved channel (newsletter) and its per-channel operations."""
    is_channel: bool

    async def delete_channel(self) -> Any: ...
    async def send_message(self, content: Any, options: dict | None = None) -> Any: ...

    # info updates
    async def set_subject(self, value: Any) -> Any: ...
    async def set_description(self, value: Any) -> Any: ...
    async def set_profile_picture(self, value: Any) -> Any: ...
    async def set_reaction_setting(self, value: Any) -> Any: ...

    # admin management
    async def send_channel_admin_invite(
        self, user_id: str | None, options: dict | None = None,
    ) -> Any: ...
    async def accept_channel_admin_invite(self) -> Any: ...
    async def revoke_channel_admin_invite(self, user_id: str | None) -> Any: ...
    async def demote_channel_admin(self, user_id: str | None) -> Any: ...
    async def transfer_channel_ownership(
        self, new_owner_id: str | None, options: dict | None = None,
    ) -> Any: ...

    async def get_subscribers(self, limit: int | None = None) -> Any: ...
    async def fetch_messages(self, search_options: dict | None = None) -> Any: ...
    async def mute(self) -> Any: ...
    async def unmute(self) -> Any: ...


class ClientHandle(Protocol):
    """Account-level entry point for one live session."""

    async def get_chat_by_id(self, chat_id: ChannelId) -> ChannelHandle | None: ...
    async def get_channels(self) -> Any: ...
    async def create_channel(self, title: str | None, options: dict | None = None) -> Any: ...
    async def subscribe_to_channel(self, channel_id: ChannelId) -> Any: ...
    async def unsubscribe_from_channel(
        self, channel_id: ChannelId, options: dict | None = None,
    ) -> Any: ...
    async def search_channels(self, search_options: dict | None = None) -> Any: ...
    async def get_channel_by_invite_code(self, invite_code: str) -> Any: ...


class SessionRegistry(Protocol):
    """Lookup of live client handles by session id — owned outside the gateway."""

    def get(self, session_id: SessionId) -> ClientHandle | None: ...
    def __len__(self) -> int: ...
