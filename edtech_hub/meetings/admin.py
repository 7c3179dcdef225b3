from django.contrib import admin

from edtech_hub.meetings import models


@admin.register(models.OAuthToken)
class OAuthTokenAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "provider", "provider_user_id", "expires_at"]
    exclude = ["access_token_encrypted", "refresh_token_encrypted"]


@admin.register(models.ExternalClassroom)
class ExternalClassroomAdmin(admin.ModelAdmin):
    list_display = ["id", "provider", "provider_course_id", "title", "synced_at"]
    search_fields = ["title", "provider_course_id"]


@admin.register(models.ExternalMeeting)
class ExternalMeetingAdmin(admin.ModelAdmin):
    list_display = ["id", "provider", "session", "provider_meeting_url", "scheduled_at"]
