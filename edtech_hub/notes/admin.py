from django.contrib import admin

from edtech_hub.notes import models


@admin.register(models.Note)
class NoteAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "user", "session", "is_ai_generated", "created_at"]
    search_fields = ["title", "content"]
    list_filter = ["language", "is_ai_generated"]


@admin.register(models.Translation)
class TranslationAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "from_language", "to_language", "created_at"]
    list_filter = ["to_language"]
