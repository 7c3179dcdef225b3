from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.livesessions import services
from edtech_hub.livesessions.models import LiveSession
from edtech_hub.meetings.api.serializers import ExternalMeetingSerializer
from edtech_hub.meetings.services import latest_meeting
from edtech_hub.videos.api.serializers import AddVideoSerializer
from edtech_hub.videos.api.serializers import SessionVideoSerializer
from edtech_hub.videos.services import add_video

from .filters import LiveSessionFilter
from .serializers import AttendanceResultSerializer
from .serializers import LiveSessionSerializer
from .serializers import SessionAttendanceSerializer
from .serializers import StartSessionSerializer


@extend_schema_view(
    list=extend_schema(tags=["Sessions"]),
    retrieve=extend_schema(tags=["Sessions"]),
)
class LiveSessionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    GenericViewSet,
):
    """Live sessions: lifecycle, attendance, meeting link and videos."""

    queryset = LiveSession.objects.select_related("classroom").order_by("-start_time")
    serializer_class = LiveSessionSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = LiveSessionFilter
    pagination_class = None

    @extend_schema(
        tags=["Sessions"],
        request=StartSessionSerializer,
        responses={201: LiveSessionSerializer},
    )
    def create(self, request, *args, **kwargs):
        ser = StartSessionSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        session = services.start_session(
            ser.validated_data["classroom"], request.user, ser.validated_data["title"]
        )
        return Response(
            LiveSessionSerializer(session).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(tags=["Sessions"], responses=LiveSessionSerializer(many=True))
    @action(detail=False, methods=["get"])
    def live(self, request):
        qs = self.get_queryset().filter(is_live=True)
        return Response(LiveSessionSerializer(qs, many=True).data)

    @extend_schema(tags=["Sessions"], request=None, responses=LiveSessionSerializer)
    @action(detail=True, methods=["post"])
    def end(self, request, pk=None):
        session = services.end_session(self.get_object(), request.user)
        return Response(LiveSessionSerializer(session).data)

    @extend_schema(tags=["Sessions"], request=None, responses=AttendanceResultSerializer)
    @action(detail=True, methods=["post"])
    def join(self, request, pk=None):
        session = self.get_object()
        attendance, created = services.join_session(session, request.user)
        payload = {
            "attendance": SessionAttendanceSerializer(attendance).data,
            "attendee_count": session.attendee_count,
            "created": created,
        }
        return Response(
            payload, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    @extend_schema(tags=["Sessions"], request=None, responses=AttendanceResultSerializer)
    @action(detail=True, methods=["post"])
    def leave(self, request, pk=None):
        session = self.get_object()
        attendance = services.leave_session(session, request.user)
        return Response(
            {
                "attendance": (
                    SessionAttendanceSerializer(attendance).data if attendance else None
                ),
                "attendee_count": session.attendee_count,
            }
        )

    @extend_schema(tags=["Sessions"], responses=SessionAttendanceSerializer(many=True))
    @action(detail=True, methods=["get"])
    def attendance(self, request, pk=None):
        session = self.get_object()
        if not services.can_view_attendance(request.user, session):
            msg = "Only the classroom teacher can view attendance"
            raise Unauthorized(msg)
        rows = session.attendance.select_related("student").order_by("join_time")
        return Response(SessionAttendanceSerializer(rows, many=True).data)

    @extend_schema(tags=["Sessions"], responses=ExternalMeetingSerializer)
    @action(detail=True, methods=["get"])
    def meeting(self, request, pk=None):
        meeting = latest_meeting(self.get_object())
        if meeting is None:
            return Response(None)
        return Response(ExternalMeetingSerializer(meeting).data)

    @extend_schema(
        tags=["Sessions"],
        request=AddVideoSerializer,
        responses=SessionVideoSerializer(many=True),
    )
    @action(detail=True, methods=["get", "post"])
    def videos(self, request, pk=None):
        session = self.get_object()
        if request.method == "POST":
            ser = AddVideoSerializer(data=request.data)
            ser.is_valid(raise_exception=True)
            video = add_video(
                session,
                request.user,
                ser.validated_data["url_or_id"],
                ser.validated_data.get("title", ""),
            )
            data = SessionVideoSerializer(video).data if video else None
            return Response(
                data, status=status.HTTP_201_CREATED if video else status.HTTP_200_OK
            )
        rows = session.videos.all()
        return Response(SessionVideoSerializer(rows, many=True).data)
