from rest_framework import serializers

from edtech_hub.classrooms.models import Classroom
from edtech_hub.livesessions.models import LiveSession
from edtech_hub.livesessions.models import SessionAttendance
from edtech_hub.users.api.serializers import UserSummarySerializer


class LiveSessionSerializer(serializers.ModelSerializer):
    class Meta:
        model = LiveSession
        fields = [
            "id",
            "classroom",
            "teacher",
            "title",
            "start_time",
            "end_time",
            "is_live",
            "recording_url",
            "attendee_count",
        ]
        read_only_fields = fields


class StartSessionSerializer(serializers.Serializer):
    classroom = serializers.PrimaryKeyRelatedField(queryset=Classroom.objects.all())
    title = serializers.CharField(max_length=255)


class SessionAttendanceSerializer(serializers.ModelSerializer):
    student = UserSummarySerializer(read_only=True)

    class Meta:
        model = SessionAttendance
        fields = [
            "id",
            "session",
            "student",
            "join_time",
            "leave_time",
            "duration_minutes",
        ]
        read_only_fields = fields


class AttendanceResultSerializer(serializers.Serializer):
    """Outcome of a join or leave call."""

    attendance = SessionAttendanceSerializer(allow_null=True)
    attendee_count = serializers.IntegerField()
    created = serializers.BooleanField(required=False)
