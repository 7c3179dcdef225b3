"""Minimal Google OAuth, Classroom and Calendar client over urllib."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any

from django.conf import settings

logger = logging.getLogger(__name__)

AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"  # noqa: S105 - endpoint, not a secret
COURSES_URL = "https://classroom.googleapis.com/v1/courses"
EVENTS_URL = (
    "https://www.googleapis.com/calendar/v3/calendars/primary/events"
    "?conferenceDataVersion=1"
)
SCOPES = (
    "https://www.googleapis.com/auth/classroom.courses.readonly",
    "https://www.googleapis.com/auth/classroom.rosters.readonly",
    "https://www.googleapis.com/auth/classroom.coursework.me",
    "https://www.googleapis.com/auth/calendar.events",
    "openid",
    "email",
    "profile",
)


class GoogleNotConfiguredError(Exception):
    """Raised when client id/secret/redirect URI are not set."""


class GoogleAPIError(Exception):
    def __init__(self, status: int, body: str):
        super().__init__(f"Google API error {status}: {body[:200]}")
        self.status = status
        self.body = body


@dataclass
class GoogleConfig:
    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""
    timeout: float = 15.0

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret and self.redirect_uri)


def get_google_config() -> GoogleConfig:
    return GoogleConfig(
        client_id=getattr(settings, "GOOGLE_CLIENT_ID", ""),
        client_secret=getattr(settings, "GOOGLE_CLIENT_SECRET", ""),
        redirect_uri=getattr(settings, "GOOGLE_REDIRECT_URI", ""),
        timeout=float(getattr(settings, "GOOGLE_TIMEOUT", 15.0)),
    )


class GoogleClient:
    def __init__(self, cfg: GoogleConfig):
        if not cfg.configured:
            msg = "GOOGLE_CLIENT_ID/GOOGLE_CLIENT_SECRET/GOOGLE_REDIRECT_URI missing"
            raise GoogleNotConfiguredError(msg)
        self.cfg = cfg

    def auth_url(self, state: str) -> str:
        params = {
            "client_id": self.cfg.client_id,
            "redirect_uri": self.cfg.redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "access_type": "offline",
            "prompt": "consent",
            "state": state,
        }
        return f"{AUTH_URL}?{urllib.parse.urlencode(params)}"

    def _request(
        self,
        url: str,
        *,
        data: bytes | None = None,
        headers: dict[str, str] | None = None,
        method: str = "GET",
    ) -> dict[str, Any]:
        req = urllib.request.Request(  # noqa: S310 - fixed https URLs
            url, data=data, headers=headers or {}, method=method
        )
        try:
            with urllib.request.urlopen(req, timeout=self.cfg.timeout) as resp:  # noqa: S310 - fixed https URLs
                return json.loads(resp.read().decode("utf-8") or "{}")
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", "ignore")
            logger.warning("Google HTTPError %s on %s: %s", e.code, url, body[:200])
            raise GoogleAPIError(e.code, body) from e
        except (urllib.error.URLError, TimeoutError, ValueError) as e:
            logger.warning("Google request to %s failed: %s", url, e)
            raise GoogleAPIError(0, str(e)) from e

    def _token_request(self, fields: dict[str, str]) -> dict[str, Any]:
        return self._request(
            TOKEN_URL,
            data=urllib.parse.urlencode(fields).encode("utf-8"),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            method="POST",
        )

    def exchange_code(self, code: str) -> dict[str, Any]:
        return self._token_request(
            {
                "code": code,
                "client_id": self.cfg.client_id,
                "client_secret": self.cfg.client_secret,
                "redirect_uri": self.cfg.redirect_uri,
                "grant_type": "authorization_code",
            }
        )

    def refresh(self, refresh_token: str) -> dict[str, Any]:
        return self._token_request(
            {
                "client_id": self.cfg.client_id,
                "client_secret": self.cfg.client_secret,
                "refresh_token": refresh_token,
                "grant_type": "refresh_token",
            }
        )

    def list_courses(self, access_token: str) -> dict[str, Any]:
        return self._request(
            COURSES_URL, headers={"Authorization": f"Bearer {access_token}"}
        )

    def create_meet_event(
        self, access_token: str, *, title: str, start: str, end: str, request_id: str
    ) -> dict[str, Any]:
        event = {
            "summary": title,
            "start": {"dateTime": start},
            "end": {"dateTime": end},
            "conferenceData": {"createRequest": {"requestId": request_id}},
        }
        return self._request(
            EVENTS_URL,
            data=json.dumps(event).encode("utf-8"),
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": "application/json",
            },
            method="POST",
        )


def meet_url_from_event(event: dict[str, Any]) -> str:
    entry_points = (event.get("conferenceData") or {}).get("entryPoints") or []
    for entry in entry_points:
        if entry.get("entryPointType") == "video" and entry.get("uri"):
            return entry["uri"]
    return event.get("hangoutLink") or ""
