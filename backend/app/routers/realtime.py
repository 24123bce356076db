"""WebSocket endpoint for role-scoped realtime notifications."""

import asyncio
import contextlib

import jwt
from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from app.core.auth import decode_access_token
from app.core.realtime import RealtimeChannel
from app.core.roles import Capability, has_capability

router = APIRouter()


@router.websocket("/notifications")
async def notifications_socket(websocket: WebSocket, token: str = Query(default="")) -> None:
    """Push new notifications for the caller's role.

    Connect with ``/ws/notifications?token=<access token>``. Each message is
    ``{"event": "notification:<Role>", "data": <notification>}``.
    """
    try:
        actor = decode_access_token(token)
    except jwt.InvalidTokenError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    if not has_capability(actor.role, Capability.READ_NOTIFICATIONS):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    channel: RealtimeChannel = websocket.app.state.realtime
    # Subscribed before the handshake completes; payloads queue until the sender starts
    session = channel.join(websocket, actor.role)
    sender: asyncio.Task[None] | None = None
    try:
        await websocket.accept()
        sender = asyncio.create_task(channel.pump(session))
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        channel.leave(session)
        if sender is not None:
            sender.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sender
