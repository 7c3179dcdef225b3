from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.mixins import RetrieveModelMixin
from rest_framework.mixins import UpdateModelMixin
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from edtech_hub.audit.utils import log_action
from edtech_hub.users.models import User

from .permissions import IsAdminRole
from .permissions import is_admin
from .serializers import UserActiveSerializer
from .serializers import UserRoleSerializer
from .serializers import UserSerializer


@extend_schema_view(
    list=extend_schema(tags=["Users"]),
    retrieve=extend_schema(tags=["Users"]),
    partial_update=extend_schema(tags=["Users"]),
    update=extend_schema(tags=["Users"]),
)
class UserViewSet(RetrieveModelMixin, ListModelMixin, UpdateModelMixin, GenericViewSet):
    serializer_class = UserSerializer
    queryset = User.objects.order_by("id")
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        user = self.request.user
        # Admins may list all users; others only themselves
        if is_admin(user):
            return User.objects.order_by("id")
        return User.objects.filter(pk=user.pk)

    @action(detail=False)
    def me(self, request):
        serializer = UserSerializer(request.user, context={"request": request})
        return Response(status=status.HTTP_200_OK, data=serializer.data)

    @extend_schema(request=UserRoleSerializer, responses=UserSerializer)
    @action(
        detail=True,
        methods=["patch"],
        permission_classes=[IsAuthenticated, IsAdminRole],
    )
    def role(self, request, pk=None):
        target = self.get_object()
        ser = UserRoleSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        before = target.role
        target.role = ser.validated_data["role"]
        target.save(update_fields=["role", "updated_at"])
        log_action(
            "user_role_updated",
            actor=request.user,
            target=target,
            message=f"{before} -> {target.role}",
        )
        return Response(UserSerializer(target).data)

    @extend_schema(request=UserActiveSerializer, responses=UserSerializer)
    @action(
        detail=True,
        methods=["patch"],
        permission_classes=[IsAuthenticated, IsAdminRole],
    )
    def active(self, request, pk=None):
        target = self.get_object()
        ser = UserActiveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        target.is_active = ser.validated_data["is_active"]
        target.save(update_fields=["is_active", "updated_at"])
        log_action(
            "user_activated" if target.is_active else "user_deactivated",
            actor=request.user,
            target=target,
        )
        return Response(UserSerializer(target).data)

    def perform_update(self, serializer):  # type: ignore[override]
        instance = serializer.save()
        log_action("user_updated", actor=self.request.user, target=instance)
