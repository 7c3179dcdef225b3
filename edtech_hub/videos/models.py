from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class SessionVideo(models.Model):
    class Provider(models.TextChoices):
        YOUTUBE = "youtube", _("YouTube")

    provider = models.CharField(
        max_length=20, choices=Provider.choices, default=Provider.YOUTUBE
    )
    video_id = models.CharField(max_length=32)
    title = models.CharField(max_length=255, blank=True)
    session = models.ForeignKey(
        "livesessions.LiveSession", on_delete=models.CASCADE, related_name="videos"
    )
    added_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="added_videos",
    )
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-added_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["session", "video_id"], name="uniq_session_video"
            )
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.video_id}"

    @property
    def watch_url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"
