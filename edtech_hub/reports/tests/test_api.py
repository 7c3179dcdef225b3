from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework import status

from edtech_hub.reports.models import PerformanceReport

BASE = "/api/v1/reports/"


def _payload(classroom, **extra):
    now = timezone.now()
    return {
        "classroom": classroom.pk,
        "report_type": "weekly",
        "start_date": (now - timedelta(days=7)).isoformat(),
        "end_date": now.isoformat(),
        **extra,
    }


def _report(student, classroom):
    now = timezone.now()
    return PerformanceReport.objects.create(
        student=student,
        classroom=classroom,
        report_type="weekly",
        start_date=now - timedelta(days=7),
        end_date=now,
    )


@pytest.mark.django_db
def test_student_generates_own_report(api_client, student, classroom):
    api_client.force_authenticate(user=student)
    res = api_client.post(BASE, _payload(classroom), format="json")
    assert res.status_code == status.HTTP_201_CREATED
    assert res.data["student"] == student.pk


@pytest.mark.django_db
def test_student_cannot_generate_for_peer(api_client, student, other_student, classroom):
    api_client.force_authenticate(user=student)
    res = api_client.post(
        BASE, _payload(classroom, student=other_student.pk), format="json"
    )
    assert res.status_code == status.HTTP_403_FORBIDDEN
    assert not PerformanceReport.objects.exists()


@pytest.mark.django_db
def test_teacher_generates_for_student(api_client, teacher, student, classroom):
    api_client.force_authenticate(user=teacher)
    res = api_client.post(BASE, _payload(classroom, student=student.pk), format="json")
    assert res.status_code == status.HTTP_201_CREATED
    assert res.data["student"] == student.pk


@pytest.mark.django_db
def test_inverted_window_is_rejected(api_client, student, classroom):
    api_client.force_authenticate(user=student)
    now = timezone.now()
    res = api_client.post(
        BASE,
        _payload(
            classroom,
            start_date=now.isoformat(),
            end_date=(now - timedelta(days=1)).isoformat(),
        ),
        format="json",
    )
    assert res.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
def test_student_lists_only_own_reports(api_client, student, other_student, classroom):
    mine = _report(student, classroom)
    _report(other_student, classroom)
    api_client.force_authenticate(user=student)

    res = api_client.get(BASE)
    assert [row["id"] for row in res.data] == [mine.pk]

    peer = api_client.get(BASE, {"student": other_student.pk})
    assert peer.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
def test_teacher_filters_by_student(api_client, teacher, student, other_student, classroom):
    _report(student, classroom)
    theirs = _report(other_student, classroom)
    api_client.force_authenticate(user=teacher)
    res = api_client.get(BASE, {"student": other_student.pk})
    assert [row["id"] for row in res.data] == [theirs.pk]


@pytest.mark.django_db
def test_classroom_reports_for_teacher(api_client, teacher, student, classroom):
    report = _report(student, classroom)
    api_client.force_authenticate(user=teacher)
    res = api_client.get(f"/api/v1/classrooms/{classroom.pk}/reports/")
    assert [row["id"] for row in res.data] == [report.pk]
