from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from edtech_hub.users.models import User
from tests.permissions.factories import ClassroomContext
from tests.permissions.factories import create_classroom_with_session
from tests.permissions.factories import create_user_with_role


ROLE_ADMIN = User.Role.ADMIN
ROLE_TEACHER = User.Role.TEACHER
ROLE_STUDENT = User.Role.STUDENT
ROLE_USER = User.Role.USER
ALL_ROLES = [ROLE_ADMIN, ROLE_TEACHER, ROLE_STUDENT, ROLE_USER]


class RoleAPITestCase(APITestCase):
    """Base test case with one user per role plus two classrooms.

    ``own`` belongs to the role teacher and enrolls the role student;
    ``other`` belongs to a second teacher and enrolls nobody.
    """

    def setUp(self):
        super().setUp()
        self.roles: dict[str, User] = {
            ROLE_ADMIN: create_user_with_role("admin", ROLE_ADMIN, is_staff=True),
            ROLE_TEACHER: create_user_with_role("teacher", ROLE_TEACHER),
            ROLE_STUDENT: create_user_with_role("student", ROLE_STUDENT),
            ROLE_USER: create_user_with_role("member", ROLE_USER),
        }
        self.other_teacher = create_user_with_role("teacher2", ROLE_TEACHER)
        self.classrooms: dict[str, ClassroomContext] = {
            "own": create_classroom_with_session(
                self.roles[ROLE_TEACHER],
                name="Algebra",
                students=[self.roles[ROLE_STUDENT]],
            ),
            "other": create_classroom_with_session(self.other_teacher, name="History"),
        }

    # Utilities -------------------------------------------------------------
    def authenticate(self, role: str):
        self.client.force_authenticate(user=self.roles[role])

    def get(self, url_name: str, *, role: str, reverse_kwargs=None, **kwargs):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.get(url, **kwargs)

    def post(
        self, url_name: str, *, role: str, payload=None, reverse_kwargs=None, **kwargs
    ):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.post(url, data=payload or {}, format="json", **kwargs)

    def patch(
        self, url_name: str, *, role: str, payload=None, reverse_kwargs=None, **kwargs
    ):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.patch(url, data=payload or {}, format="json", **kwargs)

    def assert_allowed(self, response):
        assert response.status_code in (
            status.HTTP_200_OK,
            status.HTTP_201_CREATED,
            status.HTTP_204_NO_CONTENT,
        ), response.data

    def assert_denied(self, response, code=status.HTTP_403_FORBIDDEN):
        assert response.status_code == code, response.data
