"""Channel Schemas — Pydantic request bodies and the success envelope.

Invariants:
    - Wire fields are camelCase (channelId, inviteCode, ...); snake_case also accepted
    - updateType / action stay plain strings so unknown values reach the dispatcher
      and produce its 400 instead of a validation error
    - options / searchOptions are free-form objects forwarded verbatim
    - Field types stay loose so values reach the handle as sent; a body that still
      fails to parse is malformed input and answered with a 500

Design Decisions:
    - alias_generator=to_camel over per-field aliases: one rule for every body
    - serialize_payload duck-types as_dict(): handles stay opaque to the route layer
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from channel_gateway.core.domain_types import ResultField


class _CamelBody(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )


class ChannelRef(_CamelBody):
    """Body carrying only the target channel (getInfo, delete, subscribe)."""
    channel_id: str | None = None


class CreateChannelRequest(_CamelBody):
    title: str | None = None
    options: dict[str, Any] | None = None


class UnsubscribeRequest(ChannelRef):
    options: dict[str, Any] | None = None


class SearchChannelsRequest(_CamelBody):
    search_options: dict[str, Any] | None = None


class InviteCodeRequest(_CamelBody):
    invite_code: str | None = None


class SendMessageRequest(ChannelRef):
    """content is text or a media object, passed through untouched."""
    content: Any = None
    options: dict[str, Any] | None = None


class UpdateChannelInfoRequest(ChannelRef):
    update_type: str | None = None
    value: Any = None


class ManageAdminsRequest(ChannelRef):
    action: str | None = None
    user_id: str | None = None
    options: dict[str, Any] | None = None


class TransferOwnershipRequest(ChannelRef):
    new_owner_id: str | None = None
    options: dict[str, Any] | None = None


class SubscribersRequest(ChannelRef):
    limit: Any = None


class FetchMessagesRequest(ChannelRef):
    search_options: dict[str, Any] | None = None


class MuteRequest(ChannelRef):
    mute: bool | None = False


# --- Responses ----------------------------------------------------------------

def serialize_payload(payload: Any) -> Any:
    """JSON-ready form of an opaque client result."""
    as_dict = getattr(payload, "as_dict", None)
    if callable(as_dict):
        return jsonable_encoder(as_dict())
    if isinstance(payload, (list, tuple)):
        return [serialize_payload(item) for item in payload]
    return jsonable_encoder(payload)


def success_envelope(field: ResultField, payload: Any) -> dict:
    """{"success": true, <field>: <payload>}."""
    return {"success": True, field.value: serialize_payload(payload)}
