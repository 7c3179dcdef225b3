from django.contrib import admin

from edtech_hub.audit import models


@admin.register(models.AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ["id", "action", "actor", "target_type", "target_id", "created_at"]
    search_fields = ["action", "message", "target_type"]
    list_filter = ["action", "created_at"]
