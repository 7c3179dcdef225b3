from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Provider(models.TextChoices):
    GOOGLE = "google", _("Google")


class OAuthToken(models.Model):
    """Encrypted provider tokens for a user (one row per provider)."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="oauth_tokens"
    )
    provider = models.CharField(
        max_length=20, choices=Provider.choices, default=Provider.GOOGLE
    )
    provider_user_id = models.CharField(max_length=255, blank=True)
    access_token_encrypted = models.TextField()
    refresh_token_encrypted = models.TextField(blank=True)
    expires_at = models.DateTimeField()
    scopes = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "provider"], name="uniq_oauth_user_provider"
            )
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider} token for {self.user_id}"


class ExternalClassroom(models.Model):
    provider = models.CharField(
        max_length=20, choices=Provider.choices, default=Provider.GOOGLE
    )
    provider_course_id = models.CharField(max_length=255, unique=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    synced_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["title"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title


class ExternalMeeting(models.Model):
    provider = models.CharField(
        max_length=20, choices=Provider.choices, default=Provider.GOOGLE
    )
    provider_meeting_id = models.CharField(max_length=255)
    provider_meeting_url = models.URLField(max_length=500, blank=True)
    session = models.ForeignKey(
        "livesessions.LiveSession",
        on_delete=models.CASCADE,
        related_name="external_meetings",
    )
    scheduled_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="scheduled_meetings",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["session", "created_at"], name="meeting_session_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.provider_meeting_id}"
