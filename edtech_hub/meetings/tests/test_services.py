import base64
import json
from datetime import timedelta

import pytest
from django.core import signing
from django.test import override_settings
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from edtech_hub.common.exceptions import IntegrationNotConfigured
from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.common.exceptions import UpstreamFailure
from edtech_hub.meetings import services
from edtech_hub.meetings.crypto import decrypt_token
from edtech_hub.meetings.crypto import encrypt_token
from edtech_hub.meetings.google import GoogleAPIError
from edtech_hub.meetings.models import ExternalMeeting
from edtech_hub.meetings.models import OAuthToken

GOOGLE_SETTINGS = {
    "GOOGLE_CLIENT_ID": "client-id",
    "GOOGLE_CLIENT_SECRET": "client-secret",
    "GOOGLE_REDIRECT_URI": "https://app.example.com/api/v1/integrations/google/oauth/callback/",
    "TOKEN_ENCRYPTION_KEY": "cd" * 32,
}

pytestmark = pytest.mark.usefixtures("google_configured")


@pytest.fixture
def google_configured():
    with override_settings(**GOOGLE_SETTINGS):
        yield


def _id_token(sub: str) -> str:
    body = base64.urlsafe_b64encode(json.dumps({"sub": sub}).encode()).decode().rstrip("=")
    return f"header.{body}.signature"


class FakeGoogleClient:
    calls: list = []
    fail = False

    def __init__(self, cfg):
        self.cfg = cfg

    def auth_url(self, state):
        return f"https://accounts.example.com/auth?state={state}"

    def exchange_code(self, code):
        type(self).calls.append(("exchange", code))
        return {
            "access_token": "access-1",
            "refresh_token": "refresh-1",
            "expires_in": 3600,
            "scope": "openid email",
            "id_token": _id_token("google-sub-42"),
        }

    def refresh(self, refresh_token):
        type(self).calls.append(("refresh", refresh_token))
        if type(self).fail:
            raise GoogleAPIError(400, "invalid_grant")
        return {"access_token": "access-2", "expires_in": 1800}

    def list_courses(self, access_token):
        type(self).calls.append(("courses", access_token))
        return {"courses": [{"id": "c1", "name": "Algebra"}]}

    def create_meet_event(self, access_token, *, title, start, end, request_id):
        type(self).calls.append(("event", access_token, title))
        return {
            "id": "evt-1",
            "conferenceData": {
                "entryPoints": [
                    {"entryPointType": "phone", "uri": "tel:+1"},
                    {"entryPointType": "video", "uri": "https://meet.google.com/abc"},
                ]
            },
        }


@pytest.fixture
def fake_google(monkeypatch):
    FakeGoogleClient.calls = []
    FakeGoogleClient.fail = False
    monkeypatch.setattr(services, "GoogleClient", FakeGoogleClient)
    return FakeGoogleClient


def _store_token(user, expires_in: timedelta) -> OAuthToken:
    return OAuthToken.objects.create(
        user=user,
        access_token_encrypted=encrypt_token("access-1"),
        refresh_token_encrypted=encrypt_token("refresh-1"),
        expires_at=timezone.now() + expires_in,
    )


@pytest.mark.django_db
def test_state_round_trip(teacher):
    data = services.parse_state(services.build_state(teacher))
    assert data["user_id"] == teacher.pk
    assert data["nonce"]


def test_tampered_state_is_rejected():
    state = signing.dumps({"user_id": 1}, salt="another-salt")
    with pytest.raises(ValidationError):
        services.parse_state(state)


@pytest.mark.django_db
def test_complete_oauth_stores_encrypted_tokens(fake_google, teacher):
    now = timezone.now()
    token = services.complete_oauth("auth-code", services.build_state(teacher), now=now)

    assert token.user == teacher
    assert token.provider_user_id == "google-sub-42"
    assert token.access_token_encrypted != "access-1"
    assert decrypt_token(token.access_token_encrypted) == "access-1"
    assert decrypt_token(token.refresh_token_encrypted) == "refresh-1"
    assert token.expires_at == now + timedelta(seconds=3600)
    assert token.scopes == ["openid", "email"]
    assert fake_google.calls == [("exchange", "auth-code")]


@pytest.mark.django_db
def test_reconnecting_updates_single_row(fake_google, teacher):
    services.complete_oauth("a", services.build_state(teacher))
    services.complete_oauth("b", services.build_state(teacher))
    assert OAuthToken.objects.filter(user=teacher).count() == 1


@pytest.mark.django_db
def test_fresh_token_is_not_refreshed(fake_google, teacher):
    token = _store_token(teacher, timedelta(minutes=30))
    assert services.ensure_access_token(token) == "access-1"
    assert fake_google.calls == []


@pytest.mark.django_db
def test_expiring_token_is_refreshed(fake_google, teacher):
    token = _store_token(teacher, timedelta(seconds=30))
    now = timezone.now()

    assert services.ensure_access_token(token, now=now) == "access-2"

    token.refresh_from_db()
    assert decrypt_token(token.access_token_encrypted) == "access-2"
    assert token.expires_at == now + timedelta(seconds=1800)
    assert fake_google.calls == [("refresh", "refresh-1")]


@pytest.mark.django_db
def test_refresh_failure_is_upstream_error(fake_google, teacher):
    fake_google.fail = True
    token = _store_token(teacher, timedelta(seconds=-5))
    with pytest.raises(UpstreamFailure):
        services.ensure_access_token(token)


@pytest.mark.django_db
def test_list_courses_requires_connection(fake_google, teacher):
    with pytest.raises(Unauthorized):
        services.list_courses(teacher)


@pytest.mark.django_db
def test_schedule_meet_records_meeting(fake_google, teacher, live_session):
    _store_token(teacher, timedelta(hours=1))
    start = timezone.now() + timedelta(hours=1)

    meeting = services.schedule_meet(
        teacher,
        live_session,
        title="Review",
        start=start.isoformat(),
        end=(start + timedelta(hours=1)).isoformat(),
    )

    assert meeting.provider_meeting_id == "evt-1"
    assert meeting.provider_meeting_url == "https://meet.google.com/abc"
    assert services.latest_meeting(live_session) == meeting
    assert ("event", "access-1", "Review") in fake_google.calls


@pytest.mark.django_db
def test_schedule_meet_rejects_non_owner(fake_google, student, live_session):
    with pytest.raises(Unauthorized):
        services.schedule_meet(
            student, live_session, title="x", start="2030-01-01T10:00:00Z", end="2030-01-01T11:00:00Z"
        )
    assert not ExternalMeeting.objects.exists()


@pytest.mark.django_db
def test_import_classroom_upserts():
    services.import_classroom("c1", "Algebra")
    updated = services.import_classroom("c1", "Algebra II", "Second term")
    assert updated.title == "Algebra II"
    assert updated.description == "Second term"


@pytest.mark.django_db
def test_missing_configuration_is_503(teacher):
    with override_settings(GOOGLE_CLIENT_ID=""), pytest.raises(IntegrationNotConfigured):
        services.build_auth_url(teacher)
