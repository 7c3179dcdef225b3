from rest_framework import serializers

from edtech_hub.chat.models import Message


class MessageSerializer(serializers.ModelSerializer):
    text = serializers.CharField(trim_whitespace=True)

    class Meta:
        model = Message
        fields = ["id", "channel", "user", "name", "text", "created_at"]
        read_only_fields = ["id", "user", "name", "created_at"]
