from rest_framework import serializers

from edtech_hub.videos.models import SessionVideo


class SessionVideoSerializer(serializers.ModelSerializer):
    watch_url = serializers.CharField(read_only=True)

    class Meta:
        model = SessionVideo
        fields = [
            "id",
            "provider",
            "video_id",
            "title",
            "session",
            "added_by",
            "added_at",
            "watch_url",
        ]
        read_only_fields = fields


class AddVideoSerializer(serializers.Serializer):
    url_or_id = serializers.CharField(max_length=500)
    title = serializers.CharField(max_length=255, required=False, allow_blank=True)
