import logging

from celery import shared_task

from .ai import summarize_note as summarize
from .models import Note

logger = logging.getLogger(__name__)


@shared_task(name="notes.summarize_note")
def summarize_note(note_id: int) -> bool:
    """Summarize a note in the background.

    Returns:
        False when the note no longer exists.
    """
    note = Note.objects.filter(pk=note_id).first()
    if note is None:
        logger.info("Note %s gone; nothing to summarize", note_id)
        return False
    summarize(note)
    return True
