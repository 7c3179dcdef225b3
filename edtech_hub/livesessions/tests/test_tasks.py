import pytest
from django.core import mail
from django.test import override_settings

from edtech_hub.livesessions.tasks import send_session_start_emails


@pytest.mark.django_db
def test_no_emails_without_resend_key(live_session, enrolled):
    assert send_session_start_emails(live_session.pk) == 0
    assert mail.outbox == []


@pytest.mark.django_db
@override_settings(RESEND_API_KEY="re_test")
def test_one_email_per_enrolled_student(live_session, enrolled, student):
    assert send_session_start_emails(live_session.pk) == 1
    assert len(mail.outbox) == 1
    assert mail.outbox[0].to == [student.email]
    assert live_session.title in mail.outbox[0].body


@pytest.mark.django_db
@override_settings(RESEND_API_KEY="re_test")
def test_send_failures_are_swallowed(live_session, enrolled, monkeypatch):
    def boom(*args, **kwargs):
        msg = "smtp down"
        raise OSError(msg)

    monkeypatch.setattr("edtech_hub.notifications.services.send_mail", boom)
    assert send_session_start_emails(live_session.pk) == 0


@pytest.mark.django_db
@override_settings(RESEND_API_KEY="re_test")
def test_missing_session_sends_nothing():
    assert send_session_start_emails(424242) == 0
