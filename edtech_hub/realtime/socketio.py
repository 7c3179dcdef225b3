"""Global Socket.IO server shared by every realtime feature.

Frontend convention:
- Socket.IO path: /ws/realtime/
- Auth: `query.token` (JWT access token), or `auth.token` as a fallback

Every connection joins its per-user room. Clients enter channel and session
rooms explicitly with ``join_channel`` / ``join_session``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qs

import socketio
from asgiref.sync import async_to_sync
from channels.db import database_sync_to_async
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError

logger = logging.getLogger(__name__)


sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins="*",
    logger=False,
    engineio_logger=False,
)


def _normalize_room_suffix(value: str) -> str:
    return "_".join(value.strip().lower().split())


def room_for_user(user_id: int) -> str:
    return f"user_{int(user_id)}"


def room_for_channel(channel: str) -> str:
    return f"channel_{_normalize_room_suffix(channel)}"


def room_for_session(session_id: int) -> str:
    return f"session_{int(session_id)}"


@database_sync_to_async
def _get_user_id_from_access_token(token: str) -> int:
    jwt_auth = JWTAuthentication()
    validated = jwt_auth.get_validated_token(token)
    user = jwt_auth.get_user(validated)
    return int(user.id)


@database_sync_to_async
def _record_heartbeat(user_id: int, channel: str) -> None:
    from edtech_hub.presence.services import record_heartbeat  # noqa: PLC0415
    from edtech_hub.users.models import User  # noqa: PLC0415

    user = User.objects.filter(pk=user_id, is_active=True).first()
    record_heartbeat(user, channel)


def _extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract JWT token from Socket.IO environ/auth.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner

    query_string: str | bytes = ""
    if isinstance(scope, dict) and "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif isinstance(scope, dict) and "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token

    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    return None


def _channel_from(data: Any) -> str:
    if isinstance(data, dict):
        data = data.get("channel")
    return data.strip() if isinstance(data, str) else ""


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    token = _extract_token(environ, auth)
    if not token:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg)

    try:
        user_id = await _get_user_id_from_access_token(token)
    except TokenError as exc:
        if "expired" in str(exc).lower():
            msg = "jwt_expired"
            raise ConnectionRefusedError(msg) from exc
        msg = "unauthorized"
        raise ConnectionRefusedError(msg) from exc
    except AuthenticationFailed as exc:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg) from exc
    except Exception as exc:
        logger.exception("Socket.IO connect error")
        msg = "server_error"
        raise ConnectionRefusedError(msg) from exc

    await sio.save_session(sid, {"user_id": user_id})
    await sio.enter_room(sid, room_for_user(user_id))


@sio.event
async def disconnect(sid: str):
    _ = sid


@sio.event
async def join_channel(sid: str, data: Any):
    channel = _channel_from(data)
    if not channel:
        return {"ok": False}
    await sio.enter_room(sid, room_for_channel(channel))
    return {"ok": True, "room": room_for_channel(channel)}


@sio.event
async def leave_channel(sid: str, data: Any):
    channel = _channel_from(data)
    if channel:
        await sio.leave_room(sid, room_for_channel(channel))
    return {"ok": bool(channel)}


@sio.event
async def join_session(sid: str, data: Any):
    session_id = data.get("session_id") if isinstance(data, dict) else data
    try:
        room = room_for_session(int(session_id))
    except (TypeError, ValueError):
        return {"ok": False}
    await sio.enter_room(sid, room)
    return {"ok": True, "room": room}


@sio.event
async def presence_ping(sid: str, data: Any):
    """Record a heartbeat for the connected user on a channel."""

    channel = _channel_from(data)
    session = await sio.get_session(sid)
    user_id = session.get("user_id") if isinstance(session, dict) else None
    if not channel or user_id is None:
        return {"ok": False}
    await _record_heartbeat(user_id, channel)
    return {"ok": True}


def emit_event_to_room(room: str, event: str, payload: dict[str, Any]) -> None:
    """Emit an event to a room from sync Django code."""

    async_to_sync(sio.emit)(event, payload, room=room)


def emit_event_to_user(user_id: int, event: str, payload: dict[str, Any]) -> None:
    emit_event_to_room(room_for_user(user_id), event, payload)


def emit_event_to_channel(channel: str, event: str, payload: dict[str, Any]) -> None:
    emit_event_to_room(room_for_channel(channel), event, payload)


def emit_event_to_session(
    session_id: int,
    event: str,
    payload: dict[str, Any],
) -> None:
    emit_event_to_room(room_for_session(session_id), event, payload)
