"""API Dependencies — FastAPI providers for the registry and dispatcher.

Invariants:
    - The registry is read from app.state (set by lifespan), never imported as a global
    - A dispatcher is built per request; it holds no state beyond the registry

Design Decisions:
    - Depends() chain over module globals: tests swap the registry via
      app.dependency_overrides[get_session_registry]
"""

from fastapi import Depends, Request

from channel_gateway.core.handle_protocols import SessionRegistry
from channel_gateway.services.channel_dispatch import ChannelDispatcher


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.session_registry


def get_channel_dispatcher(
    registry: SessionRegistry = Depends(get_session_registry),
) -> ChannelDispatcher:
    return ChannelDispatcher(registry)
