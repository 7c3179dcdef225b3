import pytest
from rest_framework import status

from edtech_hub.livesessions.models import LiveSession
from edtech_hub.livesessions.models import SessionAttendance


@pytest.mark.django_db
def test_teacher_starts_session(api_client, teacher, classroom):
    api_client.force_authenticate(user=teacher)
    res = api_client.post(
        "/api/v1/sessions/",
        {"classroom": classroom.pk, "title": "Limits"},
        format="json",
    )
    assert res.status_code == status.HTTP_201_CREATED
    assert res.data["is_live"] is True
    assert res.data["attendee_count"] == 0


@pytest.mark.django_db
def test_student_cannot_start_session(api_client, student, classroom):
    api_client.force_authenticate(user=student)
    res = api_client.post(
        "/api/v1/sessions/",
        {"classroom": classroom.pk, "title": "Limits"},
        format="json",
    )
    assert res.status_code == status.HTTP_403_FORBIDDEN
    assert not LiveSession.objects.exists()


@pytest.mark.django_db
def test_join_twice_then_leave(api_client, student, live_session):
    api_client.force_authenticate(user=student)
    url = f"/api/v1/sessions/{live_session.pk}/"

    first = api_client.post(url + "join/")
    second = api_client.post(url + "join/")
    assert first.status_code == status.HTTP_201_CREATED
    assert second.status_code == status.HTTP_200_OK
    assert second.data["attendee_count"] == 1
    assert first.data["attendance"]["id"] == second.data["attendance"]["id"]

    left = api_client.post(url + "leave/")
    assert left.status_code == status.HTTP_200_OK
    assert left.data["attendee_count"] == 0
    assert left.data["attendance"]["leave_time"] is not None


@pytest.mark.django_db
def test_leave_without_join_is_ok(api_client, student, live_session):
    api_client.force_authenticate(user=student)
    res = api_client.post(f"/api/v1/sessions/{live_session.pk}/leave/")
    assert res.status_code == status.HTTP_200_OK
    assert res.data == {"attendance": None, "attendee_count": 0}


@pytest.mark.django_db
def test_join_requires_authentication(api_client, live_session):
    res = api_client.post(f"/api/v1/sessions/{live_session.pk}/join/")
    assert res.status_code == status.HTTP_401_UNAUTHORIZED
    assert not SessionAttendance.objects.exists()


@pytest.mark.django_db
def test_join_unknown_session_is_404(api_client, student):
    api_client.force_authenticate(user=student)
    res = api_client.post("/api/v1/sessions/999999/join/")
    assert res.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
def test_live_lists_only_live_sessions(api_client, student, live_session, classroom, teacher):
    LiveSession.objects.create(
        classroom=classroom,
        teacher=teacher,
        title="Old",
        start_time=live_session.start_time,
        is_live=False,
    )
    api_client.force_authenticate(user=student)
    res = api_client.get("/api/v1/sessions/live/")
    assert [row["id"] for row in res.data] == [live_session.pk]


@pytest.mark.django_db
def test_end_session_by_owner(api_client, teacher, live_session):
    api_client.force_authenticate(user=teacher)
    res = api_client.post(f"/api/v1/sessions/{live_session.pk}/end/")
    assert res.status_code == status.HTTP_200_OK
    assert res.data["is_live"] is False


@pytest.mark.django_db
def test_attendance_visible_to_teacher_only(api_client, teacher, student, live_session):
    api_client.force_authenticate(user=student)
    api_client.post(f"/api/v1/sessions/{live_session.pk}/join/")
    denied = api_client.get(f"/api/v1/sessions/{live_session.pk}/attendance/")
    assert denied.status_code == status.HTTP_403_FORBIDDEN

    api_client.force_authenticate(user=teacher)
    res = api_client.get(f"/api/v1/sessions/{live_session.pk}/attendance/")
    assert res.status_code == status.HTTP_200_OK
    assert res.data[0]["student"]["id"] == student.pk


@pytest.mark.django_db
def test_filter_sessions_by_classroom(api_client, student, live_session):
    api_client.force_authenticate(user=student)
    res = api_client.get("/api/v1/sessions/", {"classroom": live_session.classroom_id})
    assert [row["id"] for row in res.data] == [live_session.pk]
    res = api_client.get("/api/v1/sessions/", {"classroom": 999999})
    assert res.data == []
