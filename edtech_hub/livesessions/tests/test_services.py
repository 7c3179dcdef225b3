from datetime import timedelta

import pytest
from django.contrib.auth.models import AnonymousUser
from django.utils import timezone
from rest_framework.exceptions import NotAuthenticated

from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.livesessions.models import LiveSession
from edtech_hub.livesessions.models import SessionAttendance
from edtech_hub.livesessions.services import end_session
from edtech_hub.livesessions.services import join_session
from edtech_hub.livesessions.services import leave_session
from edtech_hub.livesessions.services import start_session
from edtech_hub.notifications.models import Notification


def _count(session: LiveSession) -> int:
    session.refresh_from_db(fields=["attendee_count"])
    return session.attendee_count


@pytest.mark.django_db
def test_join_join_leave_scenario(live_session, student):
    t0 = timezone.now()

    first, created = join_session(live_session, student, now=t0)
    assert created is True
    assert _count(live_session) == 1

    again, created = join_session(
        live_session, student, now=t0 + timedelta(milliseconds=10)
    )
    assert created is False
    assert again.pk == first.pk
    assert _count(live_session) == 1
    assert SessionAttendance.objects.filter(session=live_session).count() == 1

    closed = leave_session(live_session, student, now=t0 + timedelta(milliseconds=600_000))
    assert closed.pk == first.pk
    assert closed.leave_time == t0 + timedelta(milliseconds=600_000)
    assert closed.duration_minutes == 10  # noqa: PLR2004
    assert _count(live_session) == 0


@pytest.mark.django_db
def test_duration_is_floored_to_whole_minutes(live_session, student):
    t0 = timezone.now()
    join_session(live_session, student, now=t0)
    closed = leave_session(live_session, student, now=t0 + timedelta(seconds=179))
    assert closed.duration_minutes == 2  # noqa: PLR2004


@pytest.mark.django_db
def test_leave_without_open_record_is_noop(live_session, student):
    assert leave_session(live_session, student) is None
    assert _count(live_session) == 0
    assert not SessionAttendance.objects.exists()


@pytest.mark.django_db
def test_counter_never_goes_negative(live_session, student, other_student):
    t0 = timezone.now()
    join_session(live_session, student, now=t0)
    # Counter drifted below the number of open records
    LiveSession.objects.filter(pk=live_session.pk).update(attendee_count=0)

    leave_session(live_session, student, now=t0 + timedelta(minutes=1))
    leave_session(live_session, other_student, now=t0 + timedelta(minutes=1))

    assert _count(live_session) == 0


@pytest.mark.django_db
def test_rejoin_after_leave_opens_new_record(live_session, student):
    t0 = timezone.now()
    join_session(live_session, student, now=t0)
    leave_session(live_session, student, now=t0 + timedelta(minutes=5))
    _, created = join_session(live_session, student, now=t0 + timedelta(minutes=6))

    assert created is True
    assert SessionAttendance.objects.filter(session=live_session, student=student).count() == 2  # noqa: PLR2004
    assert (
        SessionAttendance.objects.filter(
            session=live_session, student=student, leave_time__isnull=True
        ).count()
        == 1
    )
    assert _count(live_session) == 1


@pytest.mark.django_db
def test_counter_tracks_several_students(live_session, student, other_student):
    join_session(live_session, student)
    join_session(live_session, other_student)
    assert _count(live_session) == 2  # noqa: PLR2004

    leave_session(live_session, student)
    assert _count(live_session) == 1


@pytest.mark.django_db
def test_anonymous_join_and_leave_are_rejected(live_session):
    with pytest.raises(NotAuthenticated):
        join_session(live_session, AnonymousUser())
    with pytest.raises(NotAuthenticated):
        leave_session(live_session, AnonymousUser())
    assert _count(live_session) == 0


@pytest.mark.django_db
def test_start_session_notifies_enrolled_students(classroom, teacher, enrolled, student):
    session = start_session(classroom, teacher, "Intro")

    assert session.is_live is True
    assert session.attendee_count == 0
    assert session.teacher == teacher
    note = Notification.objects.get(recipient=student)
    assert note.notification_type == Notification.Type.SESSION_STARTED
    assert note.related_link == f"/sessions/{session.pk}"


@pytest.mark.django_db
def test_start_session_rejects_students_and_other_teachers(
    classroom, student, django_user_model
):
    with pytest.raises(Unauthorized):
        start_session(classroom, student, "Nope")

    stranger = django_user_model.objects.create_user(
        username="t2", email="t2@example.com", password="x", role="teacher"
    )
    with pytest.raises(Unauthorized):
        start_session(classroom, stranger, "Nope")


@pytest.mark.django_db
def test_admin_can_start_and_end_any_session(classroom, admin_user):
    session = start_session(classroom, admin_user, "Admin run")
    ended = end_session(session, admin_user)

    assert ended.is_live is False
    assert ended.end_time is not None


@pytest.mark.django_db
def test_end_session_requires_owner(live_session, student):
    with pytest.raises(Unauthorized):
        end_session(live_session, student)
    live_session.refresh_from_db()
    assert live_session.is_live is True
