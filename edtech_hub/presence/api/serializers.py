from rest_framework import serializers

from edtech_hub.presence.services import MAX_WINDOW_MS


class HeartbeatSerializer(serializers.Serializer):
    channel = serializers.CharField(max_length=255, trim_whitespace=True)


class OnlineQuerySerializer(serializers.Serializer):
    channel = serializers.CharField(max_length=255)
    window_ms = serializers.IntegerField(
        required=False, min_value=0, max_value=MAX_WINDOW_MS
    )


class OnlineUserSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    name = serializers.CharField()
    last_seen = serializers.DateTimeField()
