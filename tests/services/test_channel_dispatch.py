"""Channel Dispatch — tests for delegation, channel resolution and fault mapping.

Tests cover:
    - Each operation delegates to the right handle method with the right arguments
    - Missing / non-channel chats raise ChannelNotFoundError and stop there
    - Unknown updateType / action raise 400 errors without calling any handle method
    - Upstream exceptions become ClientOperationError with the original message
    - Unknown sessions raise SessionUnavailableError
"""

import pytest

from channel_gateway.core.errors import (
    ChannelNotFoundError, ClientOperationError, InvalidAdminActionError,
    InvalidUpdateTypeError, SessionUnavailableError,
)
from channel_gateway.infrastructure.session_registry import InMemorySessionRegistry
from channel_gateway.services.channel_dispatch import ChannelDispatcher
from tests.fake_handles import FakeChannel, FakeClient

CID = "123@newsletter"


@pytest.fixture
def dispatcher(registry):
    return ChannelDispatcher(registry)


# --- Client-level operations --------------------------------------------------

async def test_get_all_channels_returns_listing(dispatcher, fake_client):
    fake_client.get_channels.return_value = [{"id": "c1"}]
    assert await dispatcher.get_all_channels("s1") == [{"id": "c1"}]


async def test_create_channel_forwards_title_and_options(dispatcher, fake_client):
    result = await dispatcher.create_channel("s1", "My Channel", {"description": "d"})
    assert result == "create_channel-ok"
    fake_client.create_channel.assert_awaited_once_with("My Channel", {"description": "d"})


async def test_subscribe_does_not_resolve_chat(dispatcher, fake_client):
    await dispatcher.subscribe_to_channel("s1", CID)
    fake_client.subscribe_to_channel.assert_awaited_once_with(CID)
    fake_client.get_chat_by_id.assert_not_awaited()


async def test_unsubscribe_forwards_options(dispatcher, fake_client):
    await dispatcher.unsubscribe_from_channel("s1", CID, {"deleteLocalModels": True})
    fake_client.unsubscribe_from_channel.assert_awaited_once_with(
        CID, {"deleteLocalModels": True},
    )


async def test_search_channels_forwards_search_options(dispatcher, fake_client):
    await dispatcher.search_channels("s1", {"searchText": "news", "limit": 10})
    fake_client.search_channels.assert_awaited_once_with(
        {"searchText": "news", "limit": 10},
    )


async def test_get_channel_by_invite_code(dispatcher, fake_client):
    fake_client.get_channel_by_invite_code.return_value = {"id": CID}
    assert await dispatcher.get_channel_by_invite_code("s1", "AbCd") == {"id": CID}
    fake_client.get_channel_by_invite_code.assert_awaited_once_with("AbCd")


# --- Channel-scoped operations ------------------------------------------------

async def test_get_channel_info_returns_handle(dispatcher, channel):
    assert await dispatcher.get_channel_info("s1", CID) is channel


async def test_delete_channel(dispatcher, channel):
    assert await dispatcher.delete_channel("s1", CID) == "delete_channel-ok"
    channel.delete_channel.assert_awaited_once_with()


async def test_send_message_forwards_content_and_options(dispatcher, channel):
    result = await dispatcher.send_channel_message("s1", CID, "hi", {"linkPreview": False})
    assert result == "send_message-ok"
    channel.send_message.assert_awaited_once_with("hi", {"linkPreview": False})


async def test_transfer_ownership(dispatcher, channel):
    await dispatcher.transfer_channel_ownership("s1", CID, "555@c.us", {"shouldDismissSelfAsAdmin": True})
    channel.transfer_channel_ownership.assert_awaited_once_with(
        "555@c.us", {"shouldDismissSelfAsAdmin": True},
    )


async def test_get_subscribers_forwards_limit(dispatcher, channel):
    await dispatcher.get_channel_subscribers("s1", CID, 25)
    channel.get_subscribers.assert_awaited_once_with(25)


async def test_fetch_messages_forwards_search_options(dispatcher, channel):
    await dispatcher.fetch_channel_messages("s1", CID, {"limit": 50})
    channel.fetch_messages.assert_awaited_once_with({"limit": 50})


async def test_mute_true_calls_mute(dispatcher, channel):
    assert await dispatcher.mute_channel("s1", CID, True) == "mute-ok"
    assert channel.channel_calls() == ["mute"]


async def test_mute_false_calls_unmute(dispatcher, channel):
    assert await dispatcher.mute_channel("s1", CID, False) == "unmute-ok"
    assert channel.channel_calls() == ["unmute"]


# --- updateChannelInfo --------------------------------------------------------

@pytest.mark.parametrize("update_type, method", [
    ("subject", "set_subject"),
    ("description", "set_description"),
    ("profilePicture", "set_profile_picture"),
    ("reactionSetting", "set_reaction_setting"),
])
async def test_update_type_routes_to_setter(dispatcher, channel, update_type, method):
    result = await dispatcher.update_channel_info("s1", CID, update_type, "v")
    assert result == f"{method}-ok"
    getattr(channel, method).assert_awaited_once_with("v")
    assert channel.channel_calls() == [method]


@pytest.mark.parametrize("update_type", ["title", "", None])
async def test_invalid_update_type_calls_no_setter(dispatcher, channel, update_type):
    with pytest.raises(InvalidUpdateTypeError) as exc_info:
        await dispatcher.update_channel_info("s1", CID, update_type, "v")
    assert exc_info.value.http_status == 400
    assert exc_info.value.context.operation == "updateChannelInfo"
    assert channel.channel_calls() == []


# --- manageChannelAdmins ------------------------------------------------------

async def test_admin_invite_forwards_user_and_options(dispatcher, channel):
    await dispatcher.manage_channel_admins("s1", CID, "invite", "555@c.us", {"comment": "join"})
    channel.send_channel_admin_invite.assert_awaited_once_with("555@c.us", {"comment": "join"})


async def test_admin_accept_takes_no_arguments(dispatcher, channel):
    await dispatcher.manage_channel_admins("s1", CID, "accept", "555@c.us", {"x": 1})
    channel.accept_channel_admin_invite.assert_awaited_once_with()


@pytest.mark.parametrize("action, method", [
    ("revoke", "revoke_channel_admin_invite"),
    ("demote", "demote_channel_admin"),
])
async def test_admin_revoke_and_demote_forward_user_only(dispatcher, channel, action, method):
    await dispatcher.manage_channel_admins("s1", CID, action, "555@c.us", {"x": 1})
    getattr(channel, method).assert_awaited_once_with("555@c.us")
    assert channel.channel_calls() == [method]


async def test_invalid_admin_action_calls_no_admin_method(dispatcher, channel):
    with pytest.raises(InvalidAdminActionError) as exc_info:
        await dispatcher.manage_channel_admins("s1", CID, "promote", "555@c.us", None)
    assert exc_info.value.message == "Invalid admin action"
    assert channel.channel_calls() == []


# --- Channel not found --------------------------------------------------------

CHANNEL_SCOPED_CALLS = [
    ("get_channel_info", ()),
    ("delete_channel", ()),
    ("send_channel_message", ("hi", None)),
    ("update_channel_info", ("subject", "v")),
    ("manage_channel_admins", ("invite", "555@c.us", None)),
    ("transfer_channel_ownership", ("555@c.us", None)),
    ("get_channel_subscribers", (10,)),
    ("fetch_channel_messages", ({"limit": 5},)),
    ("mute_channel", (True,)),
]


@pytest.mark.parametrize("operation, args", CHANNEL_SCOPED_CALLS)
async def test_missing_chat_raises_not_found(dispatcher, operation, args):
    with pytest.raises(ChannelNotFoundError) as exc_info:
        await getattr(dispatcher, operation)("s1", "999@newsletter", *args)
    assert exc_info.value.http_status == 404
    assert exc_info.value.context.channel_id == "999@newsletter"


@pytest.mark.parametrize("operation, args", CHANNEL_SCOPED_CALLS)
async def test_non_channel_chat_stops_before_any_channel_call(operation, args):
    group = FakeChannel("42@g.us", is_channel=False)
    dispatcher = ChannelDispatcher(
        InMemorySessionRegistry({"s1": FakeClient({"42@g.us": group})}),
    )
    with pytest.raises(ChannelNotFoundError):
        await getattr(dispatcher, operation)("s1", "42@g.us", *args)
    assert group.channel_calls() == []


async def test_invalid_update_type_on_missing_chat_is_not_found(dispatcher):
    """Channel resolution runs before the discriminator is checked."""
    with pytest.raises(ChannelNotFoundError):
        await dispatcher.update_channel_info("s1", "999@newsletter", "title", "v")


# --- Fault mapping ------------------------------------------------------------

async def test_upstream_exception_becomes_client_operation_error(dispatcher, fake_client):
    fake_client.get_channels.side_effect = ConnectionError("socket hang up")
    with pytest.raises(ClientOperationError) as exc_info:
        await dispatcher.get_all_channels("s1")
    err = exc_info.value
    assert err.http_status == 500
    assert err.message == "socket hang up"
    assert err.context.operation == "getAllChannels"
    assert err.context.debug_info == {"exception_type": "ConnectionError"}
    assert isinstance(err.__cause__, ConnectionError)


async def test_channel_method_exception_is_mapped(dispatcher, channel):
    channel.send_message.side_effect = RuntimeError("Evaluation failed")
    with pytest.raises(ClientOperationError, match="Evaluation failed"):
        await dispatcher.send_channel_message("s1", CID, "hi", None)


async def test_lookup_exception_is_mapped(dispatcher, fake_client):
    fake_client.get_chat_by_id.side_effect = TimeoutError("lookup timed out")
    with pytest.raises(ClientOperationError, match="lookup timed out"):
        await dispatcher.delete_channel("s1", CID)


async def test_unknown_session_raises_session_unavailable(dispatcher):
    with pytest.raises(SessionUnavailableError) as exc_info:
        await dispatcher.get_all_channels("ghost")
    assert exc_info.value.http_status == 500
    assert exc_info.value.context.operation == "getAllChannels"
