from django.contrib import admin

from edtech_hub.videos import models


@admin.register(models.SessionVideo)
class SessionVideoAdmin(admin.ModelAdmin):
    list_display = ["id", "video_id", "title", "session", "added_by", "added_at"]
    search_fields = ["video_id", "title"]
