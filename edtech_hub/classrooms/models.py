from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Classroom(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    teacher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="taught_classrooms",
    )
    subject = models.CharField(max_length=150)
    grade = models.CharField(max_length=100, blank=True)
    is_active = models.BooleanField(default=True)
    max_students = models.PositiveIntegerField(null=True, blank=True)
    meeting_url = models.URLField(max_length=500, blank=True)
    scheduled_time = models.DateTimeField(null=True, blank=True)
    duration_minutes = models.PositiveIntegerField(null=True, blank=True)
    language = models.CharField(max_length=50, default="en")
    allow_translation = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["teacher"], name="classroom_teacher_idx"),
            models.Index(fields=["is_active"], name="classroom_active_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


class Enrollment(models.Model):
    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        COMPLETED = "completed", _("Completed")
        DROPPED = "dropped", _("Dropped")

    classroom = models.ForeignKey(
        Classroom, on_delete=models.CASCADE, related_name="enrollments"
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )
    enrolled_at = models.DateTimeField(auto_now_add=True)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.ACTIVE
    )

    class Meta:
        ordering = ["-enrolled_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["classroom", "student"],
                name="uniq_enrollment_classroom_student",
            )
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.student_id} -> {self.classroom_id} ({self.status})"
