from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:  # import for type checking only
    from edtech_hub.chat.models import Message
from edtech_hub.realtime.socketio import emit_event_to_channel


def build_message_payload(message: Message) -> dict[str, Any]:
    return {
        "id": message.id,
        "channel": message.channel,
        "user_id": message.user_id,
        "name": message.name,
        "text": message.text,
        "created_at": message.created_at.isoformat(),
    }


def publish_message_created(message: Message) -> None:
    emit_event_to_channel(
        message.channel, "chat_message", build_message_payload(message)
    )
