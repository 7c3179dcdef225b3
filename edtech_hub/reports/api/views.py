from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.reports.models import PerformanceReport
from edtech_hub.reports.services import generate_report
from edtech_hub.users.api.permissions import is_teacher_or_admin

from .filters import PerformanceReportFilter
from .serializers import GenerateReportSerializer
from .serializers import PerformanceReportSerializer


@extend_schema_view(
    list=extend_schema(tags=["Reports"]),
    retrieve=extend_schema(tags=["Reports"]),
)
class PerformanceReportViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    GenericViewSet,
):
    """Performance reports.

    Students see and generate their own reports only; teachers and admins may
    filter by any ``student``.
    """

    serializer_class = PerformanceReportSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = PerformanceReportFilter
    pagination_class = None

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return PerformanceReport.objects.none()
        user = self.request.user
        qs = PerformanceReport.objects.order_by("-end_date", "-generated_at")
        if is_teacher_or_admin(user):
            return qs
        requested = self.request.query_params.get("student")
        if requested and requested != str(user.pk):
            msg = "Unauthorized"
            raise Unauthorized(msg)
        return qs.filter(student=user)

    @extend_schema(
        tags=["Reports"],
        request=GenerateReportSerializer,
        responses={201: PerformanceReportSerializer},
    )
    def create(self, request, *args, **kwargs):
        ser = GenerateReportSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        report = generate_report(
            user=request.user,
            student=data.get("student") or request.user,
            classroom=data["classroom"],
            report_type=data["report_type"],
            start=data["start_date"],
            end=data["end_date"],
        )
        return Response(
            PerformanceReportSerializer(report).data, status=status.HTTP_201_CREATED
        )
