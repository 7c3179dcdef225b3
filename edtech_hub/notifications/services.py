"""Session-start notifications: in-app rows plus best-effort e-mail."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.mail import send_mail

from .models import Notification

if TYPE_CHECKING:  # import for type checking only
    from collections.abc import Iterable

    from edtech_hub.livesessions.models import LiveSession

logger = logging.getLogger(__name__)


def email_enabled() -> bool:
    return bool(getattr(settings, "RESEND_API_KEY", ""))


def notify_session_started(
    session: LiveSession, recipients: Iterable
) -> list[Notification]:
    classroom = session.classroom
    # One create per row so post_save pushes each notification in realtime
    return [
        Notification.objects.create(
            recipient=student,
            title=f"{classroom.name} is live",
            message=f'"{session.title}" has started.',
            notification_type=Notification.Type.SESSION_STARTED,
            related_link=f"/sessions/{session.id}",
        )
        for student in recipients
    ]


def send_session_start_email(
    *,
    to: str,
    student_name: str,
    classroom_name: str,
    session_title: str,
) -> bool:
    """Send one session-start e-mail. Never raises; returns delivery status."""

    if not email_enabled() or not to:
        return False
    subject = f"{classroom_name}: live session started"
    body = (
        f"Hi {student_name or 'there'},\n\n"
        f'Your class "{classroom_name}" just started a live session: '
        f'"{session_title}".\n\nJoin now from your dashboard.'
    )
    try:
        send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [to])
    except Exception:
        logger.warning("Session start e-mail to %s failed", to, exc_info=True)
        return False
    return True
