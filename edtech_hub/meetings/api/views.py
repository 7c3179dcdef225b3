from django.http import HttpResponseRedirect
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from edtech_hub.meetings import services
from edtech_hub.users.api.permissions import IsTeacherOrAdmin

from .serializers import ExternalClassroomSerializer
from .serializers import ExternalMeetingSerializer
from .serializers import OAuthCallbackSerializer
from .serializers import ScheduleMeetSerializer

CONNECTED_REDIRECT = "/dashboard?integration=google_connected"


class GoogleIntegrationViewSet(ViewSet):
    """Google account linking, Classroom import and Meet scheduling."""

    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Integrations"], responses={302: None})
    @action(detail=False, methods=["get"])
    def start(self, request):
        return HttpResponseRedirect(services.build_auth_url(request.user))

    @extend_schema(
        tags=["Integrations"],
        parameters=[OAuthCallbackSerializer],
        responses={302: None},
    )
    @action(
        detail=False,
        methods=["get"],
        url_path="oauth/callback",
        permission_classes=[AllowAny],
        authentication_classes=[],
    )
    def callback(self, request):
        ser = OAuthCallbackSerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        services.complete_oauth(ser.validated_data["code"], ser.validated_data["state"])
        return HttpResponseRedirect(CONNECTED_REDIRECT)

    @extend_schema(tags=["Integrations"], responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=["get"])
    def classrooms(self, request):
        return Response(services.list_courses(request.user))

    @extend_schema(
        tags=["Integrations"],
        request=ExternalClassroomSerializer,
        responses=ExternalClassroomSerializer,
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="classrooms/import",
        permission_classes=[IsAuthenticated, IsTeacherOrAdmin],
    )
    def import_classroom(self, request):
        ser = ExternalClassroomSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        classroom = services.import_classroom(
            data["provider_course_id"], data["title"], data.get("description", "")
        )
        return Response(ExternalClassroomSerializer(classroom).data)

    @extend_schema(
        tags=["Integrations"],
        request=ScheduleMeetSerializer,
        responses={201: ExternalMeetingSerializer},
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="schedule-meet",
        permission_classes=[IsAuthenticated, IsTeacherOrAdmin],
    )
    def schedule_meet(self, request):
        ser = ScheduleMeetSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        meeting = services.schedule_meet(
            request.user,
            data["session"],
            title=data["title"],
            start=data["start"].isoformat(),
            end=data["end"].isoformat(),
        )
        return Response(
            ExternalMeetingSerializer(meeting).data, status=status.HTTP_201_CREATED
        )
