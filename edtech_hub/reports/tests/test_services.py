from datetime import timedelta

import pytest
from django.utils import timezone

from edtech_hub.audit.models import AuditLog
from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.livesessions.models import LiveSession
from edtech_hub.livesessions.models import SessionAttendance
from edtech_hub.notes.models import Note
from edtech_hub.reports.services import build_insights
from edtech_hub.reports.services import generate_report


def _attend(session, student, minutes):
    join = session.start_time
    return SessionAttendance.objects.create(
        session=session,
        student=student,
        join_time=join,
        leave_time=join + timedelta(minutes=minutes),
        duration_minutes=minutes,
    )


@pytest.fixture
def window():
    now = timezone.now()
    return now - timedelta(days=1), now + timedelta(days=1)


@pytest.mark.django_db
def test_report_scores(classroom, teacher, student, window):
    start, end = window
    first = LiveSession.objects.create(
        classroom=classroom, teacher=teacher, title="A", start_time=start + timedelta(hours=1)
    )
    LiveSession.objects.create(
        classroom=classroom, teacher=teacher, title="B", start_time=start + timedelta(hours=2)
    )
    # Outside the window
    LiveSession.objects.create(
        classroom=classroom, teacher=teacher, title="C", start_time=start - timedelta(days=3)
    )
    _attend(first, student, 30)
    _attend(first, student, 20)
    Note.objects.create(session=first, user=student, title="n", content="c")

    report = generate_report(
        user=student,
        student=student,
        classroom=classroom,
        report_type="weekly",
        start=start,
        end=end,
    )

    assert report.attendance_rate == 50.0  # noqa: PLR2004
    assert report.average_session_duration == 50.0  # noqa: PLR2004
    assert report.notes_count == 1
    assert report.participation_score == 55.0  # noqa: PLR2004
    assert report.strengths == ["Good session engagement"]
    assert report.improvements == [
        "Improve class attendance",
        "Take more detailed notes",
    ]
    assert AuditLog.objects.filter(action="report_generated").count() == 1


@pytest.mark.django_db
def test_empty_window_scores_zero(classroom, student, window):
    start, end = window
    report = generate_report(
        user=student,
        student=student,
        classroom=classroom,
        report_type="custom",
        start=start,
        end=end,
    )
    assert report.attendance_rate == 0
    assert report.participation_score == 0
    assert report.average_session_duration == 0


@pytest.mark.django_db
def test_participation_is_capped(classroom, teacher, student, window):
    start, end = window
    session = LiveSession.objects.create(
        classroom=classroom, teacher=teacher, title="A", start_time=start + timedelta(hours=1)
    )
    _attend(session, student, 60)
    for i in range(6):
        Note.objects.create(session=session, user=student, title=f"n{i}", content="c")

    report = generate_report(
        user=teacher,
        student=student,
        classroom=classroom,
        report_type="monthly",
        start=start,
        end=end,
    )
    assert report.participation_score == 100.0  # noqa: PLR2004
    assert report.strengths == [
        "Excellent attendance record",
        "Active note-taking",
        "Good session engagement",
    ]
    assert report.improvements == []


@pytest.mark.django_db
def test_student_cannot_report_on_peer(classroom, student, other_student, window):
    start, end = window
    with pytest.raises(Unauthorized):
        generate_report(
            user=student,
            student=other_student,
            classroom=classroom,
            report_type="weekly",
            start=start,
            end=end,
        )


def test_middle_attendance_is_neither_strength_nor_improvement():
    strengths, improvements = build_insights(70, 0, 0)
    assert "Excellent attendance record" not in strengths
    assert "Improve class attendance" not in improvements
