import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from edtech_hub.classrooms.models import Classroom
from edtech_hub.classrooms.models import Enrollment
from edtech_hub.livesessions.models import LiveSession
from edtech_hub.users.models import User

TEST_PASSWORD = "TestPass123!"  # noqa: S105 - test credentials only


def make_user(username: str, role: str = User.Role.USER, **extra) -> User:
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password=TEST_PASSWORD,
        role=role,
        **extra,
    )


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def user(db) -> User:
    return make_user("member", name="Casey Member")


@pytest.fixture
def teacher(db) -> User:
    return make_user("teacher", User.Role.TEACHER, name="Dr. Sarah Johnson")


@pytest.fixture
def student(db) -> User:
    return make_user("student", User.Role.STUDENT, name="Alex Chen")


@pytest.fixture
def other_student(db) -> User:
    return make_user("student2", User.Role.STUDENT, name="Maria Rodriguez")


@pytest.fixture
def admin_user(db) -> User:
    return make_user("admin", User.Role.ADMIN, name="Site Admin")


@pytest.fixture
def classroom(teacher) -> Classroom:
    return Classroom.objects.create(
        name="Advanced Algebra",
        teacher=teacher,
        subject="Mathematics",
        language="English",
    )


@pytest.fixture
def enrolled(classroom, student) -> Enrollment:
    return Enrollment.objects.create(classroom=classroom, student=student)


@pytest.fixture
def live_session(classroom, teacher) -> LiveSession:
    return LiveSession.objects.create(
        classroom=classroom,
        teacher=teacher,
        title="Quadratic equations",
        start_time=timezone.now(),
    )
