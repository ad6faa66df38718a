"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SessionId, ChannelId wrap str — opaque ids owned by the messaging network
    - Discriminated sub-actions encoded as Enums — no raw string matching in dispatch
    - Enum values match the wire values clients send (camelCase where the wire is)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SessionId = NewType("SessionId", str)
ChannelId = NewType("ChannelId", str)         # e.g. "123456789@newsletter"


# ─── Enums ───────────────────────────────────────────────────────

class UpdateType(str, Enum):
    """Channel info fields that updateChannelInfo can change."""
    SUBJECT = "subject"
    DESCRIPTION = "description"
    PROFILE_PICTURE = "profilePicture"
    REACTION_SETTING = "reactionSetting"


class AdminAction(str, Enum):
    """Admin management actions for manageChannelAdmins."""
    INVITE = "invite"
    ACCEPT = "accept"
    REVOKE = "revoke"
    DEMOTE = "demote"


class ResultField(str, Enum):
    """Payload key of the success envelope, per operation."""
    CHANNEL = "channel"
    CHANNELS = "channels"
    RESULT = "result"
    MESSAGE = "message"
    MESSAGES = "messages"
    SUBSCRIBERS = "subscribers"


def parse_update_type(raw: str | None) -> UpdateType | None:
    """Map a wire value to UpdateType, None when unsupported."""
    try:
        return UpdateType(raw)
    except ValueError:
        return None


def parse_admin_action(raw: str | None) -> AdminAction | None:
    """Map a wire value to AdminAction, None when unsupported."""
    try:
        return AdminAction(raw)
    except ValueError:
        return None
