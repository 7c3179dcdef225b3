import logging

from celery import shared_task

from edtech_hub.classrooms.services import active_students
from edtech_hub.notifications.services import email_enabled
from edtech_hub.notifications.services import send_session_start_email

from .models import LiveSession

logger = logging.getLogger(__name__)


@shared_task(name="livesessions.send_session_start_emails")
def send_session_start_emails(session_id: int) -> int:
    """E-mail every actively enrolled student that a session started.

    Returns:
        Number of e-mails handed to the mail backend.
    """
    if not email_enabled():
        return 0
    session = (
        LiveSession.objects.select_related("classroom").filter(pk=session_id).first()
    )
    if session is None:
        logger.warning("Session %s vanished before e-mails were sent", session_id)
        return 0

    sent = 0
    for student in active_students(session.classroom).exclude(email=""):
        if send_session_start_email(
            to=student.email,
            student_name=student.name,
            classroom_name=session.classroom.name,
            session_title=session.title,
        ):
            sent += 1
    return sent
