import pytest
from django.core import mail
from django.test import override_settings

from edtech_hub.notifications.models import Notification
from edtech_hub.notifications.services import send_session_start_email

EMAIL = {
    "to": "alex@example.com",
    "student_name": "Alex",
    "classroom_name": "Advanced Algebra",
    "session_title": "Quadratics",
}


def test_email_skipped_without_provider_key():
    assert send_session_start_email(**EMAIL) is False
    assert mail.outbox == []


@override_settings(RESEND_API_KEY="re_test")
def test_email_sent_with_provider_key():
    assert send_session_start_email(**EMAIL) is True
    assert mail.outbox[0].subject == "Advanced Algebra: live session started"
    assert "Quadratics" in mail.outbox[0].body


@override_settings(RESEND_API_KEY="re_test")
def test_email_without_recipient_is_skipped():
    assert send_session_start_email(**{**EMAIL, "to": ""}) is False


@pytest.mark.django_db
def test_new_notification_is_pushed_to_recipient(
    monkeypatch, student, django_capture_on_commit_callbacks
):
    sent = []
    monkeypatch.setattr(
        "edtech_hub.notifications.signals.publish_notification_created", sent.append
    )
    with django_capture_on_commit_callbacks(execute=True):
        note = Notification.objects.create(recipient=student, title="t", message="m")

    assert sent == [note]
