from dataclasses import asdict

from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from edtech_hub.presence.services import online_users
from edtech_hub.presence.services import record_heartbeat

from .serializers import HeartbeatSerializer
from .serializers import OnlineQuerySerializer
from .serializers import OnlineUserSerializer


class PresenceViewSet(ViewSet):
    """Heartbeat endpoint and online-users query for a channel."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Presence"],
        request=HeartbeatSerializer,
        responses={204: None},
    )
    @action(detail=False, methods=["post"], permission_classes=[AllowAny])
    def ping(self, request):
        ser = HeartbeatSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        # Anonymous pings are accepted and dropped
        record_heartbeat(request.user, ser.validated_data["channel"])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=["Presence"],
        parameters=[
            OpenApiParameter("channel", str, required=True),
            OpenApiParameter("window_ms", int, required=False),
        ],
        responses=OnlineUserSerializer(many=True),
    )
    @action(detail=False, methods=["get"])
    def online(self, request):
        ser = OnlineQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        users = online_users(
            ser.validated_data["channel"],
            window_ms=ser.validated_data.get("window_ms"),
        )
        return Response(OnlineUserSerializer([asdict(u) for u in users], many=True).data)
