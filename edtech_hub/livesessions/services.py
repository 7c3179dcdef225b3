"""Live session lifecycle and the attendance counter.

``join_session`` and ``leave_session`` each run in one transaction with the
session row locked, so the open-record check, the attendance write and the
``attendee_count`` adjustment are applied together or not at all.
"""

from __future__ import annotations

import logging
from datetime import datetime
from datetime import timedelta

from django.db import IntegrityError
from django.db import transaction
from django.db.models import F
from django.db.models.functions import Greatest
from django.utils import timezone
from rest_framework.exceptions import NotAuthenticated

from edtech_hub.audit.utils import log_action
from edtech_hub.classrooms.models import Classroom
from edtech_hub.classrooms.services import active_students
from edtech_hub.classrooms.services import can_manage
from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.notifications.services import notify_session_started
from edtech_hub.realtime.events.sessions import publish_attendance_changed
from edtech_hub.users.api.permissions import is_admin
from edtech_hub.users.api.permissions import is_teacher_or_admin
from edtech_hub.users.models import User

from .models import LiveSession
from .models import SessionAttendance
from .tasks import send_session_start_emails

logger = logging.getLogger(__name__)

MINUTE = timedelta(minutes=1)


def _require_authenticated(user) -> None:
    if not (user and getattr(user, "is_authenticated", False)):
        msg = "Must be authenticated"
        raise NotAuthenticated(msg)


def _open_attendance(session: LiveSession, student: User):
    return SessionAttendance.objects.filter(
        session=session, student=student, leave_time__isnull=True
    ).first()


def _after_commit_publish(session_id: int) -> None:
    def _publish():
        session = LiveSession.objects.filter(pk=session_id).first()
        if session is not None:
            publish_attendance_changed(session)

    transaction.on_commit(_publish)


def join_session(
    session: LiveSession,
    student: User,
    now: datetime | None = None,
) -> tuple[SessionAttendance, bool]:
    """Open an attendance record for ``student`` and bump the counter.

    Joining while a record is already open returns that record unchanged.
    """

    _require_authenticated(student)
    now = now or timezone.now()
    with transaction.atomic():
        locked = LiveSession.objects.select_for_update().get(pk=session.pk)
        existing = _open_attendance(locked, student)
        if existing is not None:
            return existing, False
        try:
            with transaction.atomic():
                attendance = SessionAttendance.objects.create(
                    session=locked, student=student, join_time=now
                )
        except IntegrityError:
            # Lost a race against a concurrent join for the same student
            return _open_attendance(locked, student), False
        LiveSession.objects.filter(pk=locked.pk).update(
            attendee_count=F("attendee_count") + 1
        )
        _after_commit_publish(locked.pk)
    session.refresh_from_db(fields=["attendee_count"])
    logger.info("User %s joined session %s", student.pk, session.pk)
    return attendance, True


def leave_session(
    session: LiveSession,
    student: User,
    now: datetime | None = None,
) -> SessionAttendance | None:
    """Close the open attendance record, if any, and decrement the counter."""

    _require_authenticated(student)
    now = now or timezone.now()
    with transaction.atomic():
        locked = LiveSession.objects.select_for_update().get(pk=session.pk)
        attendance = _open_attendance(locked, student)
        if attendance is None:
            return None
        attendance.leave_time = now
        attendance.duration_minutes = max(0, (now - attendance.join_time) // MINUTE)
        attendance.save(update_fields=["leave_time", "duration_minutes"])
        LiveSession.objects.filter(pk=locked.pk).update(
            attendee_count=Greatest(F("attendee_count") - 1, 0)
        )
        _after_commit_publish(locked.pk)
    session.refresh_from_db(fields=["attendee_count"])
    logger.info("User %s left session %s", student.pk, session.pk)
    return attendance


def start_session(classroom: Classroom, user: User, title: str) -> LiveSession:
    """Start a live session and tell enrolled students about it."""

    if not is_teacher_or_admin(user) or not can_manage(user, classroom):
        msg = "Only the classroom teacher can start sessions"
        raise Unauthorized(msg)
    with transaction.atomic():
        session = LiveSession.objects.create(
            classroom=classroom,
            teacher=user,
            title=title,
            start_time=timezone.now(),
            is_live=True,
            attendee_count=0,
        )
        notify_session_started(session, active_students(classroom))
        log_action("session_started", actor=user, target=session)

    transaction.on_commit(lambda: send_session_start_emails.delay(session.pk))
    return session


def end_session(session: LiveSession, user: User) -> LiveSession:
    owns = session.teacher_id == user.pk or session.classroom.teacher_id == user.pk
    if not (owns or is_admin(user)):
        msg = "Unauthorized"
        raise Unauthorized(msg)
    session.end_time = timezone.now()
    session.is_live = False
    session.save(update_fields=["end_time", "is_live"])
    log_action("session_ended", actor=user, target=session)
    _after_commit_publish(session.pk)
    return session


def can_view_attendance(user: User, session: LiveSession) -> bool:
    return is_teacher_or_admin(user) and (
        is_admin(user) or can_manage(user, session.classroom)
    )
