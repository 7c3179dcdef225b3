from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class PerformanceReport(models.Model):
    class ReportType(models.TextChoices):
        WEEKLY = "weekly", _("Weekly")
        MONTHLY = "monthly", _("Monthly")
        SEMESTER = "semester", _("Semester")
        CUSTOM = "custom", _("Custom")

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="performance_reports",
    )
    classroom = models.ForeignKey(
        "classrooms.Classroom", on_delete=models.CASCADE, related_name="reports"
    )
    report_type = models.CharField(max_length=16, choices=ReportType.choices)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    attendance_rate = models.FloatField(default=0)
    participation_score = models.FloatField(default=0)
    notes_count = models.PositiveIntegerField(default=0)
    average_session_duration = models.FloatField(default=0)
    strengths = models.JSONField(default=list, blank=True)
    improvements = models.JSONField(default=list, blank=True)
    generated_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-end_date", "-generated_at"]
        indexes = [
            models.Index(fields=["student", "end_date"], name="report_student_end_idx"),
            models.Index(fields=["classroom"], name="report_classroom_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.report_type} report for {self.student_id}"
