"""Role-based permission classes shared by every API module."""

from rest_framework.permissions import BasePermission

from edtech_hub.users.models import User

ROLE_ADMIN = User.Role.ADMIN
ROLE_TEACHER = User.Role.TEACHER
ROLE_STUDENT = User.Role.STUDENT


def has_role(user, *roles: str) -> bool:
    if not (user and getattr(user, "is_authenticated", False)):
        return False
    return getattr(user, "role", None) in roles


def is_admin(user) -> bool:
    return has_role(user, ROLE_ADMIN)


def is_teacher_or_admin(user) -> bool:
    return has_role(user, ROLE_TEACHER, ROLE_ADMIN)


class _RolePermission(BasePermission):
    """Base helper to gate access by role names."""

    allowed_roles: tuple[str, ...] = ()

    def has_permission(self, request, view) -> bool:
        return has_role(getattr(request, "user", None), *self.allowed_roles)


class IsAdminRole(_RolePermission):
    allowed_roles = (ROLE_ADMIN,)


class IsTeacherOrAdmin(_RolePermission):
    allowed_roles = (ROLE_TEACHER, ROLE_ADMIN)
