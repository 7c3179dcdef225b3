"""Performance report generation.

Scores are derived from attendance and note-taking inside the report window:

* attendance rate: attended sessions / sessions started in the window x 100
* participation: min(100, attendance rate + 5 per note)
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime

from django.db import transaction

from edtech_hub.audit.utils import log_action
from edtech_hub.classrooms.models import Classroom
from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.livesessions.models import LiveSession
from edtech_hub.livesessions.models import SessionAttendance
from edtech_hub.notes.models import Note
from edtech_hub.users.api.permissions import is_teacher_or_admin

from .models import PerformanceReport

EXCELLENT_ATTENDANCE = 80
POOR_ATTENDANCE = 60
ACTIVE_NOTES = 5
ENGAGED_MINUTES = 45
POINTS_PER_NOTE = 5


def check_can_report_on(user, student) -> None:
    if student.pk != user.pk and not is_teacher_or_admin(user):
        msg = "Unauthorized"
        raise Unauthorized(msg)


def build_insights(
    attendance_rate: float, notes_count: int, average_duration: float
) -> tuple[list[str], list[str]]:
    strengths: list[str] = []
    improvements: list[str] = []

    if attendance_rate >= EXCELLENT_ATTENDANCE:
        strengths.append("Excellent attendance record")
    elif attendance_rate < POOR_ATTENDANCE:
        improvements.append("Improve class attendance")

    if notes_count >= ACTIVE_NOTES:
        strengths.append("Active note-taking")
    else:
        improvements.append("Take more detailed notes")

    if average_duration >= ENGAGED_MINUTES:
        strengths.append("Good session engagement")
    else:
        improvements.append("Stay engaged for full sessions")

    return strengths, improvements


@transaction.atomic
def generate_report(  # noqa: PLR0913
    *,
    user,
    student,
    classroom: Classroom,
    report_type: str,
    start: datetime,
    end: datetime,
) -> PerformanceReport:
    check_can_report_on(user, student)

    session_ids = list(
        LiveSession.objects.filter(
            classroom=classroom, start_time__gte=start, start_time__lte=end
        ).values_list("id", flat=True)
    )

    # Minutes per attended session; several join/leave cycles add up
    minutes: dict[int, int] = defaultdict(int)
    for session_id, duration in SessionAttendance.objects.filter(
        session_id__in=session_ids, student=student
    ).values_list("session_id", "duration_minutes"):
        minutes[session_id] += duration or 0

    attended = len(minutes)
    attendance_rate = (attended / len(session_ids)) * 100 if session_ids else 0.0
    average_duration = sum(minutes.values()) / attended if attended else 0.0
    notes_count = Note.objects.filter(
        user=student, created_at__gte=start, created_at__lte=end
    ).count()
    strengths, improvements = build_insights(attendance_rate, notes_count, average_duration)

    report = PerformanceReport.objects.create(
        student=student,
        classroom=classroom,
        report_type=report_type,
        start_date=start,
        end_date=end,
        attendance_rate=attendance_rate,
        participation_score=min(100.0, attendance_rate + notes_count * POINTS_PER_NOTE),
        notes_count=notes_count,
        average_session_duration=average_duration,
        strengths=strengths,
        improvements=improvements,
    )
    log_action("report_generated", actor=user, target=report)
    return report
