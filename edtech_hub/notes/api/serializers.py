from rest_framework import serializers

from edtech_hub.livesessions.models import LiveSession
from edtech_hub.notes.models import Note
from edtech_hub.notes.models import Translation


class NoteSerializer(serializers.ModelSerializer):
    session = serializers.PrimaryKeyRelatedField(queryset=LiveSession.objects.all())

    class Meta:
        model = Note
        fields = [
            "id",
            "session",
            "user",
            "title",
            "content",
            "summary",
            "key_points",
            "language",
            "is_ai_generated",
            "confidence",
            "created_at",
        ]
        read_only_fields = [
            "id",
            "user",
            "summary",
            "key_points",
            "is_ai_generated",
            "confidence",
            "created_at",
        ]


class NoteSummarySerializer(serializers.Serializer):
    summary = serializers.CharField()
    key_points = serializers.ListField(child=serializers.CharField())
    confidence = serializers.FloatField()


class TranslateRequestSerializer(serializers.Serializer):
    text = serializers.CharField()
    to_language = serializers.CharField(max_length=50)
    from_language = serializers.CharField(max_length=50, required=False, default="auto")
    session = serializers.PrimaryKeyRelatedField(
        queryset=LiveSession.objects.all(), required=False, allow_null=True
    )


class TranslationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Translation
        fields = [
            "id",
            "original_text",
            "translated_text",
            "from_language",
            "to_language",
            "session",
            "created_at",
        ]
        read_only_fields = fields


class SummarizeTextSerializer(serializers.Serializer):
    text = serializers.CharField()
