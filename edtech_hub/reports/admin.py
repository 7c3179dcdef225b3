from django.contrib import admin

from edtech_hub.reports import models


@admin.register(models.PerformanceReport)
class PerformanceReportAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "student",
        "classroom",
        "report_type",
        "attendance_rate",
        "participation_score",
        "generated_at",
    ]
    list_filter = ["report_type", "generated_at"]
