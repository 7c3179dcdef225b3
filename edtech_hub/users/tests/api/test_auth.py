import pytest
from rest_framework import status
from rest_framework.test import APIClient

from edtech_hub.audit.models import AuditLog
from edtech_hub.conftest import TEST_PASSWORD

pytestmark = pytest.mark.django_db


def obtain_tokens(client, username: str, password: str) -> tuple[str, str]:
    r = client.post(
        "/api/v1/auth/jwt/create/",
        {"username": username, "password": password},
        format="json",
    )
    assert r.status_code == status.HTTP_200_OK, r.content
    return r.data["access"], r.data["refresh"]


def test_jwt_create_and_verify(student):
    client = APIClient()
    access, _ = obtain_tokens(client, "student", TEST_PASSWORD)

    r = client.post("/api/v1/auth/jwt/verify/", {"token": access}, format="json")
    assert r.status_code == status.HTTP_200_OK

    bad = access[:-2] + "ab"
    r = client.post("/api/v1/auth/jwt/verify/", {"token": bad}, format="json")
    assert r.status_code == status.HTTP_401_UNAUTHORIZED


def test_bearer_token_reaches_protected_endpoint(student):
    client = APIClient()
    access, _ = obtain_tokens(client, "student@example.com", TEST_PASSWORD)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    r = client.get("/api/v1/users/me/")
    assert r.status_code == status.HTTP_200_OK
    assert r.data["username"] == "student"


def test_cookie_login_sets_jwt_cookies(student):
    client = APIClient()
    r = client.post(
        "/api/v1/auth/login/",
        {"username": "student", "password": TEST_PASSWORD},
        format="json",
    )
    assert r.status_code == status.HTTP_200_OK
    assert "access_token" in r.cookies


def test_login_with_wrong_password_fails(student):
    client = APIClient()
    r = client.post(
        "/api/v1/auth/login/",
        {"username": "student", "password": "nope"},  # noqa: S106
        format="json",
    )
    assert r.status_code == status.HTTP_400_BAD_REQUEST


def test_session_login_is_audited(client, student):
    client.force_login(student)
    assert AuditLog.objects.filter(action="login", actor=student).exists()
