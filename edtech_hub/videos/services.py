from __future__ import annotations

import re
from urllib.parse import parse_qs
from urllib.parse import urlparse

from django.db import IntegrityError
from django.db import transaction
from rest_framework.exceptions import ValidationError

from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.users.api.permissions import is_admin

from .models import SessionVideo

_BARE_ID = re.compile(r"^[A-Za-z0-9_-]{11}$")


def extract_youtube_id(value: str) -> str | None:
    """Return the video id from a watch URL, a youtu.be link or a bare id."""

    value = (value or "").strip()
    parsed = urlparse(value)
    host = (parsed.hostname or "").lower()
    if "youtube.com" in host:
        vid = parse_qs(parsed.query).get("v", [""])[0]
        if vid:
            return vid
    if host == "youtu.be":
        vid = parsed.path.lstrip("/")
        if vid:
            return vid
    if _BARE_ID.match(value):
        return value
    return None


def _check_can_manage(session, user) -> None:
    if not (session.teacher_id == user.pk or is_admin(user)):
        msg = "Unauthorized"
        raise Unauthorized(msg)


def add_video(session, user, url_or_id: str, title: str = "") -> SessionVideo | None:
    """Attach a YouTube video. Re-adding the same video is a no-op (None)."""

    _check_can_manage(session, user)
    video_id = extract_youtube_id(url_or_id)
    if not video_id:
        raise ValidationError({"url_or_id": "Invalid YouTube URL or ID"})
    if SessionVideo.objects.filter(session=session, video_id=video_id).exists():
        return None
    try:
        with transaction.atomic():
            return SessionVideo.objects.create(
                session=session, video_id=video_id, title=title or "", added_by=user
            )
    except IntegrityError:
        return None


def remove_video(video: SessionVideo, user) -> None:
    _check_can_manage(video.session, user)
    video.delete()


def videos_for_sessions(session_ids: list[int]) -> dict[int, list[SessionVideo]]:
    out: dict[int, list[SessionVideo]] = {sid: [] for sid in session_ids}
    for video in SessionVideo.objects.filter(session_id__in=session_ids):
        out[video.session_id].append(video)
    return out
