from django.contrib import admin

from edtech_hub.chat import models


@admin.register(models.Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ["id", "channel", "name", "text", "created_at"]
    search_fields = ["channel", "text", "name"]
    list_filter = ["channel"]
