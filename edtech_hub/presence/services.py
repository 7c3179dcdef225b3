"""Heartbeat recorder and liveness query.

A user is online on a channel when their last heartbeat falls within the
window ``[now - window_ms, now]``. The server never expires records; clients
ping every ``PRESENCE_POLL_INTERVAL_MS`` and readers apply the window.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC
from datetime import datetime
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from edtech_hub.users.models import DEFAULT_DISPLAY_NAME

from .models import PresenceRecord


@dataclass(frozen=True)
class OnlineUser:
    user_id: int
    name: str
    last_seen: datetime


MAX_WINDOW_MS = 365 * 24 * 60 * 60 * 1000


def default_window_ms() -> int:
    return int(getattr(settings, "PRESENCE_WINDOW_MS", 120_000))


def record_heartbeat(user, channel: str, now: datetime | None = None):
    """Upsert the caller's presence record on ``channel``.

    Anonymous callers are ignored and ``None`` is returned.
    """

    if user is None or not getattr(user, "is_authenticated", False):
        return None
    now = now or timezone.now()
    fallback_name = getattr(user, "name", "") or DEFAULT_DISPLAY_NAME

    with transaction.atomic():
        record, created = PresenceRecord.objects.select_for_update().get_or_create(
            channel=channel,
            user=user,
            defaults={"display_name": fallback_name, "last_seen": now},
        )
        if not created:
            record.last_seen = now
            update_fields = ["last_seen"]
            if not record.display_name:
                record.display_name = fallback_name
                update_fields.append("display_name")
            record.save(update_fields=update_fields)

    return record


def online_users(
    channel: str,
    window_ms: int | None = None,
    now: datetime | None = None,
) -> list[OnlineUser]:
    """Users whose last heartbeat on ``channel`` is within the window."""

    if window_ms is None:
        window_ms = default_window_ms()
    now = now or timezone.now()
    try:
        cutoff = now - timedelta(milliseconds=window_ms)
    except OverflowError:
        # Window reaches past the earliest representable datetime
        cutoff = datetime.min.replace(tzinfo=UTC)
    rows = PresenceRecord.objects.filter(
        channel=channel, last_seen__gte=cutoff, last_seen__lte=now
    ).order_by("-last_seen")

    seen: set[int] = set()
    out: list[OnlineUser] = []
    for row in rows:
        if row.user_id in seen:
            continue
        seen.add(row.user_id)
        out.append(
            OnlineUser(
                user_id=row.user_id,
                name=row.display_name or DEFAULT_DISPLAY_NAME,
                last_seen=row.last_seen,
            )
        )
    return out
