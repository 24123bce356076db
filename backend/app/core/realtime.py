"""Role-scoped realtime fan-out over WebSockets.

Every connection joins exactly one room, ``role:<Role>``, chosen from its
token's role claim. Publishing is fire-and-forget: payloads are queued on each
connected session and written by that session's own sender task, so a
publish never waits on a socket and events within one room keep publish order.
Sessions that are not connected at publish time never see the event.
"""

import asyncio
import logging
from dataclasses import dataclass
from threading import Lock
from typing import Any, Protocol

from fastapi import Request, WebSocket, status

from app.core.config import settings
from app.core.errors import RealtimeDeliveryError
from app.core.roles import Role

logger = logging.getLogger(__name__)


class RealtimePublisher(Protocol):
    def publish(self, role: Role, payload: dict[str, Any]) -> int: ...


def room_name(role: Role) -> str:
    return f"role:{role.value}"


def event_name(role: Role) -> str:
    return f"notification:{role.value}"


@dataclass(eq=False)
class RealtimeSession:
    websocket: WebSocket
    role: Role
    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue[dict[str, Any]]
    sender: asyncio.Task[None] | None = None
    evicted: bool = False


class RealtimeChannel:
    """Tracks connected sessions per role room and pushes payloads to them.

    Each session buffers at most ``max_queued`` undelivered messages; a session
    that falls further behind is dropped and its socket closed.
    """

    def __init__(self, max_queued: int | None = None) -> None:
        self.max_queued = max_queued if max_queued is not None else settings.REALTIME_QUEUE_MAX
        self._rooms: dict[str, set[RealtimeSession]] = {}
        self._lock = Lock()
        self._closing: set[asyncio.Task[None]] = set()

    def join(self, websocket: WebSocket, role: Role) -> RealtimeSession:
        """Register a connection in its role's room. Must run on the socket's event loop."""
        session = RealtimeSession(
            websocket=websocket,
            role=role,
            loop=asyncio.get_running_loop(),
            queue=asyncio.Queue(maxsize=self.max_queued),
        )
        with self._lock:
            self._rooms.setdefault(room_name(role), set()).add(session)
        logger.info("Realtime session joined %s", room_name(role))
        return session

    def leave(self, session: RealtimeSession) -> None:
        room = room_name(session.role)
        with self._lock:
            members = self._rooms.get(room)
            if members is None:
                return
            members.discard(session)
            if not members:
                del self._rooms[room]

    def sessions(self, role: Role) -> list[RealtimeSession]:
        with self._lock:
            return list(self._rooms.get(room_name(role), ()))

    def publish(self, role: Role, payload: dict[str, Any]) -> int:
        """Queue ``payload`` for every session in ``role``'s room.

        Returns the number of sessions the payload was queued for. Sessions
        whose event loop is gone are dropped; if any were dropped,
        RealtimeDeliveryError is raised after the remaining sessions have
        been served.
        """
        message = {"event": event_name(role), "data": payload}
        delivered = 0
        dead: list[RealtimeSession] = []
        for session in self.sessions(role):
            try:
                session.loop.call_soon_threadsafe(self._enqueue, session, message)
            except RuntimeError:
                dead.append(session)
                continue
            delivered += 1

        for session in dead:
            self.leave(session)
        if dead:
            raise RealtimeDeliveryError(
                f"{len(dead)} session(s) in {room_name(role)} were no longer reachable"
            )
        return delivered

    def _enqueue(self, session: RealtimeSession, message: dict[str, Any]) -> None:
        # Runs on the session's own loop
        if session.evicted:
            return
        try:
            session.queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning(
                "Dropping realtime session in %s: %d messages undelivered",
                room_name(session.role),
                session.queue.qsize(),
            )
            self._evict(session)

    def _evict(self, session: RealtimeSession) -> None:
        session.evicted = True
        self.leave(session)
        if session.sender is not None:
            session.sender.cancel()
        closing = session.loop.create_task(self._close(session))
        self._closing.add(closing)
        closing.add_done_callback(self._closing.discard)

    async def _close(self, session: RealtimeSession) -> None:
        try:
            await session.websocket.close(code=status.WS_1013_TRY_AGAIN_LATER)
        except Exception:
            logger.debug(
                "Realtime session in %s was already closed",
                room_name(session.role),
                exc_info=True,
            )

    async def pump(self, session: RealtimeSession) -> None:
        """Write queued payloads to the session's socket until cancelled."""
        session.sender = asyncio.current_task()
        while True:
            message = await session.queue.get()
            try:
                await session.websocket.send_json(message)
            except Exception:
                logger.warning(
                    "Dropping realtime session in %s after send failure",
                    room_name(session.role),
                    exc_info=True,
                )
                self.leave(session)
                return


def get_realtime_channel(request: Request) -> RealtimeChannel:
    return request.app.state.realtime  # type: ignore[no-any-return]
