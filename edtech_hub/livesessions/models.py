from django.conf import settings
from django.db import models
from django.db.models import Q


class LiveSession(models.Model):
    classroom = models.ForeignKey(
        "classrooms.Classroom", on_delete=models.CASCADE, related_name="sessions"
    )
    teacher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="led_sessions",
    )
    title = models.CharField(max_length=255)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)
    is_live = models.BooleanField(default=True)
    recording_url = models.URLField(max_length=500, blank=True)
    # Denormalized count of open attendance records
    attendee_count = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-start_time"]
        indexes = [
            models.Index(fields=["classroom", "start_time"], name="session_classroom_idx"),
            models.Index(fields=["is_live"], name="session_live_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.title} ({'live' if self.is_live else 'ended'})"


class SessionAttendance(models.Model):
    session = models.ForeignKey(
        LiveSession, on_delete=models.CASCADE, related_name="attendance"
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="session_attendance",
    )
    join_time = models.DateTimeField()
    leave_time = models.DateTimeField(null=True, blank=True)
    duration_minutes = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        ordering = ["-join_time"]
        indexes = [
            models.Index(fields=["session", "student"], name="attendance_session_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["session", "student"],
                condition=Q(leave_time__isnull=True),
                name="uniq_open_attendance_per_student",
            )
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.student_id} @ {self.session_id}"

    @property
    def is_open(self) -> bool:
        return self.leave_time is None
