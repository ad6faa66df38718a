"""Channel Routes — one POST endpoint per channel/newsletter operation.

Invariants:
    - session_id is always the last path segment; operation fields come from the JSON body
    - Handlers never contain business logic: body → ChannelDispatcher → success_envelope
    - Success is {"success": true, <field>: <payload>} with status 200
    - Failures are GatewayErrors raised by the dispatcher and written by error_handlers

Design Decisions:
    - camelCase action paths (getInfo, sendMessage) to mirror the library's vocabulary
    - Dispatcher injected via Depends so tests swap the session registry only
"""

import logging

from fastapi import APIRouter, Depends

from channel_gateway.api.dependencies import get_channel_dispatcher
from channel_gateway.core.domain_types import ChannelId, ResultField, SessionId
from channel_gateway.schemas.channel import (
    ChannelRef,
    CreateChannelRequest,
    FetchMessagesRequest,
    InviteCodeRequest,
    ManageAdminsRequest,
    MuteRequest,
    SearchChannelsRequest,
    SendMessageRequest,
    SubscribersRequest,
    TransferOwnershipRequest,
    UnsubscribeRequest,
    UpdateChannelInfoRequest,
    success_envelope,
)
from channel_gateway.services.channel_dispatch import ChannelDispatcher

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/channels", tags=["channels"])


@router.post("/getInfo/{session_id}")
async def get_channel_info(
    session_id: str, body: ChannelRef,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    """Get information about a channel."""
    channel = await dispatcher.get_channel_info(
        SessionId(session_id), ChannelId(body.channel_id),
    )
    return success_envelope(ResultField.CHANNEL, channel)


@router.post("/getChannels/{session_id}")
async def get_all_channels(
    session_id: str,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    """List every channel the session knows about."""
    channels = await dispatcher.get_all_channels(SessionId(session_id))
    return success_envelope(ResultField.CHANNELS, channels)


@router.post("/create/{session_id}")
async def create_channel(
    session_id: str, body: CreateChannelRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    """Create a new channel with a title and optional description/picture."""
    result = await dispatcher.create_channel(
        SessionId(session_id), body.title, body.options,
    )
    return success_envelope(ResultField.RESULT, result)


@router.post("/delete/{session_id}")
async def delete_channel(
    session_id: str, body: ChannelRef,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    result = await dispatcher.delete_channel(
        SessionId(session_id), ChannelId(body.channel_id),
    )
    return success_envelope(ResultField.RESULT, result)


@router.post("/subscribe/{session_id}")
async def subscribe_to_channel(
    session_id: str, body: ChannelRef,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    result = await dispatcher.subscribe_to_channel(
        SessionId(session_id), ChannelId(body.channel_id),
    )
    return success_envelope(ResultField.RESULT, result)


@router.post("/unsubscribe/{session_id}")
async def unsubscribe_from_channel(
    session_id: str, body: UnsubscribeRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    result = await dispatcher.unsubscribe_from_channel(
        SessionId(session_id), ChannelId(body.channel_id), body.options,
    )
    return success_envelope(ResultField.RESULT, result)


@router.post("/search/{session_id}")
async def search_channels(
    session_id: str, body: SearchChannelsRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    """Search public channels, e.g. {"searchOptions": {"searchText": "news", "limit": 10}}."""
    channels = await dispatcher.search_channels(
        SessionId(session_id), body.search_options,
    )
    return success_envelope(ResultField.CHANNELS, channels)


@router.post("/getByInviteCode/{session_id}")
async def get_channel_by_invite_code(
    session_id: str, body: InviteCodeRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    channel = await dispatcher.get_channel_by_invite_code(
        SessionId(session_id), body.invite_code,
    )
    return success_envelope(ResultField.CHANNEL, channel)


@router.post("/sendMessage/{session_id}")
async def send_channel_message(
    session_id: str, body: SendMessageRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    """Send a message to a channel, e.g. channelId "123456789@newsletter"."""
    message = await dispatcher.send_channel_message(
        SessionId(session_id), ChannelId(body.channel_id),
        body.content, body.options,
    )
    return success_envelope(ResultField.MESSAGE, message)


@router.post("/updateInfo/{session_id}")
async def update_channel_info(
    session_id: str, body: UpdateChannelInfoRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    """Update subject, description, profilePicture or reactionSetting."""
    result = await dispatcher.update_channel_info(
        SessionId(session_id), ChannelId(body.channel_id),
        body.update_type, body.value,
    )
    return success_envelope(ResultField.RESULT, result)


@router.post("/manageAdmins/{session_id}")
async def manage_channel_admins(
    session_id: str, body: ManageAdminsRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    """Invite, accept, revoke or demote a channel admin."""
    result = await dispatcher.manage_channel_admins(
        SessionId(session_id), ChannelId(body.channel_id),
        body.action, body.user_id, body.options,
    )
    return success_envelope(ResultField.RESULT, result)


@router.post("/transferOwnership/{session_id}")
async def transfer_channel_ownership(
    session_id: str, body: TransferOwnershipRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    result = await dispatcher.transfer_channel_ownership(
        SessionId(session_id), ChannelId(body.channel_id),
        body.new_owner_id, body.options,
    )
    return success_envelope(ResultField.RESULT, result)


@router.post("/getSubscribers/{session_id}")
async def get_channel_subscribers(
    session_id: str, body: SubscribersRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    subscribers = await dispatcher.get_channel_subscribers(
        SessionId(session_id), ChannelId(body.channel_id), body.limit,
    )
    return success_envelope(ResultField.SUBSCRIBERS, subscribers)


@router.post("/fetchMessages/{session_id}")
async def fetch_channel_messages(
    session_id: str, body: FetchMessagesRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    """Fetch channel messages, e.g. {"searchOptions": {"limit": 50}}."""
    messages = await dispatcher.fetch_channel_messages(
        SessionId(session_id), ChannelId(body.channel_id), body.search_options,
    )
    return success_envelope(ResultField.MESSAGES, messages)


@router.post("/mute/{session_id}")
async def mute_channel(
    session_id: str, body: MuteRequest,
    dispatcher: ChannelDispatcher = Depends(get_channel_dispatcher),
):
    """mute=true mutes the channel, mute=false unmutes it."""
    result = await dispatcher.mute_channel(
        SessionId(session_id), ChannelId(body.channel_id), body.mute,
    )
    return success_envelope(ResultField.RESULT, result)
