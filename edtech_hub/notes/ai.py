"""AI helpers for notes: summarization and translation.

Calls go through the configured LLM client. Upstream failures never surface
to the caller; a placeholder or mock result is stored instead.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from dataclasses import field

from edtech_hub.integrations.llm.client import get_llm_client_from_settings
from edtech_hub.integrations.llm.prompts import SYSTEM_PROMPT
from edtech_hub.integrations.llm.prompts import build_note_summary_prompt
from edtech_hub.integrations.llm.prompts import build_translation_prompt

from .models import Note
from .models import Translation

logger = logging.getLogger(__name__)

PLACEHOLDER_SUMMARY = "Summary not available. Please try again."
DEFAULT_KEY_POINTS = ["Review core concepts", "Practice exercises", "Clarify doubts"]
LOCAL_KEY_POINTS = [
    "Key concept discussed",
    "Important formula mentioned",
    "Assignment deadline noted",
]
AI_CONFIDENCE = 0.9
LOCAL_CONFIDENCE = 0.85
MAX_KEY_POINTS = 5
MOCK_SUMMARY_WORDS = 20

_SUMMARY_PREFIX = re.compile(r"^\s*summary\s*[:\-]\s*", re.IGNORECASE)
_BULLET_PREFIX = re.compile(r"^[\-\*\d\.\s]+")


@dataclass
class NoteSummary:
    summary: str
    key_points: list[str] = field(default_factory=list)
    confidence: float = AI_CONFIDENCE


def split_summary_reply(text: str) -> NoteSummary:
    """First non-empty line is the summary; following lines are key points."""

    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        return NoteSummary(PLACEHOLDER_SUMMARY, list(DEFAULT_KEY_POINTS))
    summary = _SUMMARY_PREFIX.sub("", lines[0]).strip()
    points = [_BULLET_PREFIX.sub("", line).strip() for line in lines[1:]]
    points = [p for p in points if p][:MAX_KEY_POINTS]
    return NoteSummary(summary, points or list(DEFAULT_KEY_POINTS))


def local_summary(note: Note) -> NoteSummary:
    return NoteSummary(
        summary=f"AI Summary: {note.content[:100]}...",
        key_points=list(LOCAL_KEY_POINTS),
        confidence=LOCAL_CONFIDENCE,
    )


def summarize_note(note: Note) -> NoteSummary:
    """Summarize ``note`` and store the result on it."""

    client = get_llm_client_from_settings()
    if client is None:
        result = local_summary(note)
    else:
        reply = client.generate_text(
            build_note_summary_prompt(note.title, note.language, note.content),
            system=SYSTEM_PROMPT,
        )
        if reply is None:
            logger.warning("Summary for note %s fell back to placeholder", note.pk)
        result = split_summary_reply(reply or PLACEHOLDER_SUMMARY)

    note.summary = result.summary
    note.key_points = result.key_points
    note.confidence = result.confidence
    note.save(update_fields=["summary", "key_points", "confidence"])
    return result


def mock_translation(text: str, to_language: str) -> str:
    return f"TRANSLATED ({to_language.upper()}): {text}"


def summarize_text(text: str) -> str:
    """Cheap extractive summary: the first twenty words."""

    words = text.split()
    suffix = "..." if len(words) > MOCK_SUMMARY_WORDS else ""
    return f"SUMMARY: {' '.join(words[:MOCK_SUMMARY_WORDS])}{suffix}"


def translate_text(  # noqa: PLR0913
    user,
    text: str,
    to_language: str,
    from_language: str = "auto",
    session=None,
) -> Translation:
    client = get_llm_client_from_settings()
    translated = None
    if client is not None:
        translated = client.generate_text(
            build_translation_prompt(text, from_language, to_language),
            system=SYSTEM_PROMPT,
        )
        if translated is None:
            logger.warning("Translation to %s fell back to mock", to_language)
    return Translation.objects.create(
        original_text=text,
        translated_text=(translated or "").strip() or mock_translation(text, to_language),
        from_language=from_language,
        to_language=to_language,
        session=session,
        user=user,
    )
