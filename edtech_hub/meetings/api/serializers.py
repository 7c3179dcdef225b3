from rest_framework import serializers

from edtech_hub.livesessions.models import LiveSession
from edtech_hub.meetings.models import ExternalClassroom
from edtech_hub.meetings.models import ExternalMeeting


class ExternalClassroomSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExternalClassroom
        fields = ["id", "provider", "provider_course_id", "title", "description", "synced_at"]
        read_only_fields = ["id", "provider", "synced_at"]
        # Imports upsert on the course id
        extra_kwargs = {"provider_course_id": {"validators": []}}


class ExternalMeetingSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExternalMeeting
        fields = [
            "id",
            "provider",
            "provider_meeting_id",
            "provider_meeting_url",
            "session",
            "scheduled_at",
            "created_by",
            "created_at",
        ]
        read_only_fields = fields


class ScheduleMeetSerializer(serializers.Serializer):
    session = serializers.PrimaryKeyRelatedField(queryset=LiveSession.objects.all())
    title = serializers.CharField(max_length=255)
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()

    def validate(self, attrs):
        if attrs["end"] <= attrs["start"]:
            raise serializers.ValidationError({"end": "end must be after start."})
        return attrs


class OAuthCallbackSerializer(serializers.Serializer):
    code = serializers.CharField()
    state = serializers.CharField()
