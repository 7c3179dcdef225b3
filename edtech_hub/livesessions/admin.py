from django.contrib import admin

from edtech_hub.livesessions import models


@admin.register(models.LiveSession)
class LiveSessionAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "classroom", "teacher", "is_live", "attendee_count"]
    list_filter = ["is_live", "start_time"]
    search_fields = ["title", "classroom__name"]
    readonly_fields = ["attendee_count"]


@admin.register(models.SessionAttendance)
class SessionAttendanceAdmin(admin.ModelAdmin):
    list_display = ["id", "session", "student", "join_time", "leave_time", "duration_minutes"]
    list_filter = ["join_time"]
    raw_id_fields = ["session", "student"]
