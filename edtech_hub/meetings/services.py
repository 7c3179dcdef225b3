from __future__ import annotations

import base64
import json
import logging
import secrets
from datetime import datetime
from datetime import timedelta

from django.core import signing
from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework.exceptions import ValidationError

from edtech_hub.audit.utils import log_action
from edtech_hub.common.exceptions import IntegrationNotConfigured
from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.common.exceptions import UpstreamFailure
from edtech_hub.users.api.permissions import is_admin
from edtech_hub.users.models import User

from .crypto import decrypt_token
from .crypto import encrypt_token
from .crypto import get_key
from .google import GoogleAPIError
from .google import GoogleClient
from .google import GoogleNotConfiguredError
from .google import get_google_config
from .google import meet_url_from_event
from .models import ExternalClassroom
from .models import ExternalMeeting
from .models import OAuthToken
from .models import Provider

logger = logging.getLogger(__name__)

STATE_SALT = "edtech_hub.meetings.google_state"
STATE_MAX_AGE = 60 * 15
REFRESH_MARGIN = timedelta(seconds=60)
FALLBACK_PROVIDER_USER_ID = "google-user"


def get_client() -> GoogleClient:
    try:
        client = GoogleClient(get_google_config())
        # Token storage needs the encryption key as well
        get_key()
    except (GoogleNotConfiguredError, ImproperlyConfigured) as exc:
        raise IntegrationNotConfigured(str(exc)) from exc
    return client


def build_state(user) -> str:
    payload = {
        "user_id": user.pk,
        "nonce": secrets.token_urlsafe(8),
        "ts": int(timezone.now().timestamp() * 1000),
    }
    return signing.dumps(payload, salt=STATE_SALT)


def parse_state(state: str) -> dict:
    try:
        return signing.loads(state, salt=STATE_SALT, max_age=STATE_MAX_AGE)
    except signing.BadSignature as exc:
        raise ValidationError({"state": "Invalid state"}) from exc


def build_auth_url(user) -> str:
    return get_client().auth_url(build_state(user))


def _sub_from_id_token(id_token: str | None) -> str | None:
    if not id_token:
        return None
    parts = id_token.split(".")
    if len(parts) < 2:  # noqa: PLR2004
        return None
    padded = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(padded).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    return payload.get("sub") if isinstance(payload, dict) else None


def complete_oauth(code: str, state: str, now: datetime | None = None) -> OAuthToken:
    """Exchange the authorization code and store encrypted tokens."""

    client = get_client()
    data = parse_state(state)
    user = User.objects.filter(pk=data.get("user_id"), is_active=True).first()
    if user is None:
        raise ValidationError({"state": "Unknown user"})
    try:
        resp = client.exchange_code(code)
    except GoogleAPIError as exc:
        msg = "Google token exchange failed"
        raise UpstreamFailure(msg) from exc

    now = now or timezone.now()
    token, _ = OAuthToken.objects.update_or_create(
        user=user,
        provider=Provider.GOOGLE,
        defaults={
            "provider_user_id": _sub_from_id_token(resp.get("id_token"))
            or FALLBACK_PROVIDER_USER_ID,
            "access_token_encrypted": encrypt_token(resp.get("access_token", "")),
            "refresh_token_encrypted": encrypt_token(resp.get("refresh_token") or ""),
            "expires_at": now + timedelta(seconds=int(resp.get("expires_in", 0))),
            "scopes": (resp.get("scope") or "").split(),
        },
    )
    log_action("google_connected", actor=user, target=token)
    return token


def get_token(user) -> OAuthToken:
    token = OAuthToken.objects.filter(user=user, provider=Provider.GOOGLE).first()
    if token is None:
        msg = "Google account not connected"
        raise Unauthorized(msg)
    return token


def ensure_access_token(
    token: OAuthToken,
    client: GoogleClient | None = None,
    now: datetime | None = None,
) -> str:
    """Return a usable access token, refreshing when under a minute remains."""

    now = now or timezone.now()
    if token.expires_at - now > REFRESH_MARGIN:
        return decrypt_token(token.access_token_encrypted)
    client = client or get_client()
    try:
        resp = client.refresh(decrypt_token(token.refresh_token_encrypted))
    except GoogleAPIError as exc:
        msg = "Google token refresh failed"
        raise UpstreamFailure(msg) from exc
    access = resp.get("access_token", "")
    token.access_token_encrypted = encrypt_token(access)
    token.expires_at = now + timedelta(seconds=int(resp.get("expires_in", 0)))
    token.save(update_fields=["access_token_encrypted", "expires_at", "updated_at"])
    return access


def list_courses(user) -> dict:
    client = get_client()
    access = ensure_access_token(get_token(user), client)
    try:
        return client.list_courses(access)
    except GoogleAPIError as exc:
        msg = "Google Classroom request failed"
        raise UpstreamFailure(msg) from exc


def import_classroom(
    provider_course_id: str, title: str, description: str = ""
) -> ExternalClassroom:
    classroom, _ = ExternalClassroom.objects.update_or_create(
        provider_course_id=provider_course_id,
        defaults={
            "provider": Provider.GOOGLE,
            "title": title,
            "description": description or "",
        },
    )
    return classroom


def schedule_meet(  # noqa: PLR0913
    user,
    session,
    *,
    title: str,
    start: str,
    end: str,
) -> ExternalMeeting:
    """Create a Calendar event with a Meet link and attach it to ``session``."""

    if not (session.teacher_id == user.pk or is_admin(user)):
        msg = "Unauthorized"
        raise Unauthorized(msg)
    client = get_client()
    access = ensure_access_token(get_token(user), client)
    request_id = f"meet-{int(timezone.now().timestamp() * 1000)}"
    try:
        event = client.create_meet_event(
            access, title=title, start=start, end=end, request_id=request_id
        )
    except GoogleAPIError as exc:
        msg = "Google Calendar request failed"
        raise UpstreamFailure(msg) from exc

    meeting = ExternalMeeting.objects.create(
        provider=Provider.GOOGLE,
        provider_meeting_id=event.get("id", ""),
        provider_meeting_url=meet_url_from_event(event),
        session=session,
        scheduled_at=parse_datetime(start),
        created_by=user,
    )
    log_action("meet_scheduled", actor=user, target=meeting)
    return meeting


def latest_meeting(session) -> ExternalMeeting | None:
    return ExternalMeeting.objects.filter(session=session).order_by("-created_at", "-id").first()
