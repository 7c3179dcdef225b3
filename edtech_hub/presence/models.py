from django.conf import settings
from django.db import models


class PresenceRecord(models.Model):
    """Last heartbeat of a user on a channel. Updated in place, never deleted."""

    channel = models.CharField(max_length=255)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="presence_records",
    )
    display_name = models.CharField(max_length=255, blank=True)
    last_seen = models.DateTimeField()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["channel", "user"], name="uniq_presence_channel_user"
            )
        ]
        indexes = [
            models.Index(fields=["channel", "last_seen"], name="presence_channel_seen_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.user_id}@{self.channel} {self.last_seen:%H:%M:%S}"
