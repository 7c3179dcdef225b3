from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from edtech_hub.videos.models import SessionVideo
from edtech_hub.videos.services import remove_video
from edtech_hub.videos.services import videos_for_sessions

from .serializers import SessionVideoSerializer


@extend_schema_view(destroy=extend_schema(tags=["Videos"]))
class SessionVideoViewSet(mixins.DestroyModelMixin, GenericViewSet):
    """Video removal and bulk lookup. Attaching lives under sessions."""

    queryset = SessionVideo.objects.select_related("session")
    serializer_class = SessionVideoSerializer
    permission_classes = [IsAuthenticated]

    def perform_destroy(self, instance):
        remove_video(instance, self.request.user)

    @extend_schema(
        tags=["Videos"],
        parameters=[
            OpenApiParameter(
                "sessions", str, required=True, description="Comma-separated ids"
            )
        ],
        responses={200: OpenApiTypes.OBJECT},
    )
    @action(detail=False, methods=["get"], url_path="by-sessions")
    def by_sessions(self, request):
        raw = request.query_params.get("sessions", "")
        try:
            ids = [int(p) for p in raw.split(",") if p.strip()]
        except ValueError as exc:
            raise ValidationError({"sessions": "Expected comma-separated ids."}) from exc
        grouped = videos_for_sessions(ids)
        return Response(
            {
                str(sid): SessionVideoSerializer(rows, many=True).data
                for sid, rows in grouped.items()
            },
            status=status.HTTP_200_OK,
        )
