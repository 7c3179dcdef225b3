import pytest
from rest_framework import status

from edtech_hub.videos.models import SessionVideo

VID = "dQw4w9WgXcQ"


@pytest.mark.django_db
def test_teacher_attaches_and_lists_videos(api_client, teacher, live_session):
    api_client.force_authenticate(user=teacher)
    url = f"/api/v1/sessions/{live_session.pk}/videos/"

    created = api_client.post(url, {"url_or_id": VID, "title": "Warmup"}, format="json")
    duplicate = api_client.post(url, {"url_or_id": VID}, format="json")
    listed = api_client.get(url)

    assert created.status_code == status.HTTP_201_CREATED
    assert duplicate.status_code == status.HTTP_200_OK
    assert duplicate.data is None
    assert [row["video_id"] for row in listed.data] == [VID]


@pytest.mark.django_db
def test_bad_reference_is_400(api_client, teacher, live_session):
    api_client.force_authenticate(user=teacher)
    res = api_client.post(
        f"/api/v1/sessions/{live_session.pk}/videos/",
        {"url_or_id": "nope"},
        format="json",
    )
    assert res.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
def test_student_cannot_remove_video(api_client, teacher, student, live_session):
    video = SessionVideo.objects.create(session=live_session, video_id=VID, added_by=teacher)
    api_client.force_authenticate(user=student)
    res = api_client.delete(f"/api/v1/videos/{video.pk}/")
    assert res.status_code == status.HTTP_403_FORBIDDEN

    api_client.force_authenticate(user=teacher)
    res = api_client.delete(f"/api/v1/videos/{video.pk}/")
    assert res.status_code == status.HTTP_204_NO_CONTENT
    assert not SessionVideo.objects.exists()


@pytest.mark.django_db
def test_by_sessions_groups_videos(api_client, teacher, student, live_session):
    SessionVideo.objects.create(session=live_session, video_id=VID, added_by=teacher)
    api_client.force_authenticate(user=student)
    res = api_client.get("/api/v1/videos/by-sessions/", {"sessions": f"{live_session.pk},42"})
    assert res.status_code == status.HTTP_200_OK
    assert [row["video_id"] for row in res.data[str(live_session.pk)]] == [VID]
    assert res.data["42"] == []

    bad = api_client.get("/api/v1/videos/by-sessions/", {"sessions": "a,b"})
    assert bad.status_code == status.HTTP_400_BAD_REQUEST
