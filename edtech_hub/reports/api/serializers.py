from django.contrib.auth import get_user_model
from rest_framework import serializers

from edtech_hub.classrooms.models import Classroom
from edtech_hub.reports.models import PerformanceReport

User = get_user_model()


class PerformanceReportSerializer(serializers.ModelSerializer):
    class Meta:
        model = PerformanceReport
        fields = [
            "id",
            "student",
            "classroom",
            "report_type",
            "start_date",
            "end_date",
            "attendance_rate",
            "participation_score",
            "notes_count",
            "average_session_duration",
            "strengths",
            "improvements",
            "generated_at",
        ]
        read_only_fields = fields


class GenerateReportSerializer(serializers.Serializer):
    student = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), required=False, allow_null=True
    )
    classroom = serializers.PrimaryKeyRelatedField(queryset=Classroom.objects.all())
    report_type = serializers.ChoiceField(choices=PerformanceReport.ReportType.choices)
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError(
                {"end_date": "end_date must not be before start_date."}
            )
        return attrs
