from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.viewsets import GenericViewSet

from edtech_hub.chat.models import Message
from edtech_hub.users.models import DEFAULT_DISPLAY_NAME

from .serializers import MessageSerializer

RECENT_LIMIT = 50


@extend_schema_view(
    list=extend_schema(
        tags=["Chat"],
        parameters=[OpenApiParameter("channel", str, required=True)],
    ),
    create=extend_schema(tags=["Chat"]),
)
class MessageViewSet(mixins.ListModelMixin, mixins.CreateModelMixin, GenericViewSet):
    """Latest 50 messages of a channel, newest first; send to a channel."""

    serializer_class = MessageSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Message.objects.none()
        channel = (self.request.query_params.get("channel") or "").strip()
        if self.action == "list" and not channel:
            raise ValidationError({"channel": "This query parameter is required."})
        return Message.objects.filter(channel=channel).order_by("-created_at", "-id")[
            :RECENT_LIMIT
        ]

    def perform_create(self, serializer):
        user = self.request.user
        serializer.save(user=user, name=user.name or DEFAULT_DISPLAY_NAME)
