from django.contrib import admin

from edtech_hub.classrooms import models


class EnrollmentInline(admin.TabularInline):
    model = models.Enrollment
    extra = 0
    raw_id_fields = ["student"]


@admin.register(models.Classroom)
class ClassroomAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "subject", "teacher", "is_active", "language"]
    search_fields = ["name", "subject", "teacher__email"]
    list_filter = ["is_active", "language"]
    inlines = [EnrollmentInline]


@admin.register(models.Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ["id", "classroom", "student", "status", "enrolled_at"]
    list_filter = ["status"]
