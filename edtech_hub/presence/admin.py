from django.contrib import admin

from edtech_hub.presence import models


@admin.register(models.PresenceRecord)
class PresenceRecordAdmin(admin.ModelAdmin):
    list_display = ["id", "channel", "user", "display_name", "last_seen"]
    search_fields = ["channel", "display_name"]
    list_filter = ["channel"]
