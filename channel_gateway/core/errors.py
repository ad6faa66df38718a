"""Error Hierarchy — typed, categorized exceptions for all gateway failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() always produces {"success": false, "error": <message>, "code": ...}
    - Not-Found / Bad-Request messages are fixed strings clients match on
    - Internal errors carry the underlying failure's message text verbatim

Design Decisions:
    - Single hierarchy with GatewayError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: str | None = None
    operation: str | None = None
    channel_id: str | None = None
    debug_info: dict[str, Any] | None = None


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the failure envelope written to the client."""
        return {
            "success": False,
            "error": self.message,
            "code": self.code,
        }

    def log_extra(self) -> dict:
        """Fields for logger.*(extra=...) — surfaced by the JSON formatter."""
        return {
            "error_code": self.code,
            "session_id": self.context.session_id,
            "operation": self.context.operation,
            "channel_id": self.context.channel_id,
            "debug_info": self.context.debug_info,
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class ChannelNotFoundError(GatewayError):
    """Looked-up chat is missing or is not a channel."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Channel not Found", "CHANNEL_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING,
            context, 404,
        )


class InvalidUpdateTypeError(GatewayError):
    """updateType is not one of the supported channel info fields."""
    def __init__(self, update_type: object, context: ErrorContext | None = None):
        super().__init__(
            "Invalid update type", "INVALID_UPDATE_TYPE",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )
        self.update_type = update_type


class InvalidAdminActionError(GatewayError):
    """action is not one of the supported admin actions."""
    def __init__(self, action: object, context: ErrorContext | None = None):
        super().__init__(
            "Invalid admin action", "INVALID_ADMIN_ACTION",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )
        self.action = action


# ─── Internal Errors (500-level) ────────────────────────────────

class SessionUnavailableError(GatewayError):
    """No live client is registered for the session id."""
    def __init__(self, session_id: str, context: ErrorContext | None = None):
        super().__init__(
            "Session not found", "SESSION_UNAVAILABLE",
            ErrorCategory.INTERNAL, ErrorSeverity.ERROR, context, 500,
        )
        self.session_id = session_id


class ClientOperationError(GatewayError):
    """A delegated client/channel call failed. Message is the upstream text."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CLIENT_OPERATION_FAILED",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.CRITICAL, context, 500,
        )
