from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from edtech_hub.classrooms import services
from edtech_hub.classrooms.models import Classroom
from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.livesessions.api.serializers import LiveSessionSerializer
from edtech_hub.reports.api.serializers import PerformanceReportSerializer
from edtech_hub.users.api.permissions import is_admin
from edtech_hub.users.api.permissions import is_teacher_or_admin

from .serializers import ClassroomDetailSerializer
from .serializers import ClassroomSerializer
from .serializers import EnrollmentSerializer


@extend_schema_view(
    list=extend_schema(tags=["Classrooms"]),
    retrieve=extend_schema(tags=["Classrooms"]),
    create=extend_schema(tags=["Classrooms"]),
)
class ClassroomViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    GenericViewSet,
):
    """Classrooms.

    - list: the caller's classrooms (taught or actively enrolled)
    - available: every active classroom
    - all: admin-only listing of every classroom
    """

    queryset = Classroom.objects.select_related("teacher")
    serializer_class = ClassroomSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_serializer_class(self):
        if self.action == "retrieve":
            return ClassroomDetailSerializer
        return super().get_serializer_class()

    def list(self, request, *args, **kwargs):
        qs = services.classrooms_for(request.user)
        return Response(ClassroomSerializer(qs, many=True).data)

    def perform_create(self, serializer):
        serializer.instance = services.create_classroom(
            self.request.user, **serializer.validated_data
        )

    @extend_schema(tags=["Classrooms"], responses=ClassroomSerializer(many=True))
    @action(detail=False, methods=["get"])
    def available(self, request):
        qs = Classroom.objects.filter(is_active=True).order_by("name")
        return Response(ClassroomSerializer(qs, many=True).data)

    @extend_schema(tags=["Classrooms"], responses=ClassroomSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="all")
    def all_classrooms(self, request):
        if not is_admin(request.user):
            return Response([])
        qs = Classroom.objects.order_by("id")
        return Response(ClassroomSerializer(qs, many=True).data)

    @extend_schema(tags=["Classrooms"], request=None, responses={201: EnrollmentSerializer})
    @action(detail=True, methods=["post"])
    def enroll(self, request, pk=None):
        enrollment = services.enroll(self.get_object(), request.user)
        return Response(
            EnrollmentSerializer(enrollment).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(tags=["Classrooms"], responses=LiveSessionSerializer(many=True))
    @action(detail=True, methods=["get"])
    def sessions(self, request, pk=None):
        qs = self.get_object().sessions.order_by("-start_time")
        return Response(LiveSessionSerializer(qs, many=True).data)

    @extend_schema(tags=["Classrooms"], responses=PerformanceReportSerializer(many=True))
    @action(detail=True, methods=["get"])
    def reports(self, request, pk=None):
        classroom = self.get_object()
        if not is_teacher_or_admin(request.user):
            msg = "Only teachers can view classroom reports"
            raise Unauthorized(msg)
        qs = classroom.reports.order_by("-generated_at")
        return Response(PerformanceReportSerializer(qs, many=True).data)
