from django.conf import settings
from django.db import models


class Note(models.Model):
    session = models.ForeignKey(
        "livesessions.LiveSession", on_delete=models.CASCADE, related_name="notes"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notes"
    )
    title = models.CharField(max_length=255)
    content = models.TextField()
    summary = models.TextField(blank=True, null=True)
    key_points = models.JSONField(default=list, blank=True)
    language = models.CharField(max_length=50, default="en")
    is_ai_generated = models.BooleanField(default=False)
    confidence = models.FloatField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="note_user_created_idx"),
            models.Index(fields=["session", "user"], name="note_session_user_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title


class Translation(models.Model):
    original_text = models.TextField()
    translated_text = models.TextField()
    from_language = models.CharField(max_length=50, default="auto")
    to_language = models.CharField(max_length=50)
    session = models.ForeignKey(
        "livesessions.LiveSession",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="translations",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="translations",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.from_language}->{self.to_language}: {self.original_text[:30]}"
