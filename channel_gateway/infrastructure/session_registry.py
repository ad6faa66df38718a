"""Session Registry — in-memory map from session id to live client handle.

Invariants:
    - get() never raises: unknown ids yield None, the dispatcher decides the fault
    - One handle per session id; add() replaces an existing entry

Design Decisions:
    - Plain dict, no locking: single event loop, mutations are synchronous
    - Instance lives on app.state (set in lifespan), never a module-level singleton
"""

import logging

from channel_gateway.core.domain_types import SessionId
from channel_gateway.core.handle_protocols import ClientHandle

logger = logging.getLogger(__name__)


class InMemorySessionRegistry:
    """Dict-backed SessionRegistry."""

    def __init__(self, clients: dict[str, ClientHandle] | None = None):
        self._clients: dict[str, ClientHandle] = dict(clients or {})

    def get(self, session_id: SessionId) -> ClientHandle | None:
        return self._clients.get(session_id)

    def add(self, session_id: SessionId, client: ClientHandle) -> None:
        if session_id in self._clients:
            logger.info(
                "Replacing client for session", extra={"session_id": session_id},
            )
        self._clients[session_id] = client

    def remove(self, session_id: SessionId) -> ClientHandle | None:
        return self._clients.pop(session_id, None)

    def session_ids(self) -> list[str]:
        return sorted(self._clients)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._clients

    def __len__(self) -> int:
        return len(self._clients)
