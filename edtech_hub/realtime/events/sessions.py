from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # import for type checking only
    from edtech_hub.livesessions.models import LiveSession
from edtech_hub.realtime.socketio import emit_event_to_session


def publish_attendance_changed(session: LiveSession) -> None:
    emit_event_to_session(
        session.id,
        "session_attendance",
        {
            "session_id": session.id,
            "attendee_count": session.attendee_count,
            "is_live": session.is_live,
        },
    )
