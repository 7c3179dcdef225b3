from rest_framework import serializers

from edtech_hub.users.models import User


class UserSerializer(serializers.ModelSerializer[User]):
    display_name = serializers.CharField(read_only=True)

    # Identity and role are managed by admins only
    username = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    role = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "name",
            "display_name",
            "image",
            "role",
            "institution",
            "grade",
            "subject",
            "preferred_language",
            "timezone",
            "is_active",
        ]
        read_only_fields = ["id", "is_active"]


class UserSummarySerializer(serializers.ModelSerializer[User]):
    """Compact user shape embedded in classroom and session payloads."""

    class Meta:
        model = User
        fields = ["id", "name", "email", "image", "role"]


class UserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=User.Role.choices)


class UserActiveSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()
