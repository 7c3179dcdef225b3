from django.conf import settings
from django.db import models


class Message(models.Model):
    channel = models.CharField(max_length=255)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="messages"
    )
    # Sender name at send time
    name = models.CharField(max_length=255)
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["channel", "created_at"], name="message_channel_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"[{self.channel}] {self.name}: {self.text[:40]}"
