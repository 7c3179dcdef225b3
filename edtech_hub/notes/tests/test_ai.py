import pytest

from edtech_hub.notes import ai
from edtech_hub.notes.models import Note


class FakeClient:
    def __init__(self, reply):
        self.reply = reply
        self.prompts = []

    def generate_text(self, prompt, system=None):
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
def note(live_session, student):
    return Note.objects.create(
        session=live_session,
        user=student,
        title="Factoring",
        content="Quadratics can be factored into two binomials. " * 5,
    )


def use_client(monkeypatch, client):
    monkeypatch.setattr(ai, "get_llm_client_from_settings", lambda: client)


def test_split_summary_reply_strips_prefixes():
    result = ai.split_summary_reply(
        "Summary: Factoring basics\n\n- Find two numbers\n2. Check the product\n* Verify"
    )
    assert result.summary == "Factoring basics"
    assert result.key_points == ["Find two numbers", "Check the product", "Verify"]
    assert result.confidence == ai.AI_CONFIDENCE


def test_split_summary_reply_caps_key_points():
    reply = "Top line\n" + "\n".join(f"- point {i}" for i in range(8))
    result = ai.split_summary_reply(reply)
    assert len(result.key_points) == ai.MAX_KEY_POINTS


def test_split_summary_reply_without_points_uses_defaults():
    result = ai.split_summary_reply("Only a summary")
    assert result.summary == "Only a summary"
    assert result.key_points == ai.DEFAULT_KEY_POINTS


@pytest.mark.django_db
def test_summarize_note_stores_llm_result(monkeypatch, note):
    client = FakeClient("Summary: Binomials\n- Two factors")
    use_client(monkeypatch, client)

    ai.summarize_note(note)

    note.refresh_from_db()
    assert note.summary == "Binomials"
    assert note.key_points == ["Two factors"]
    assert note.confidence == ai.AI_CONFIDENCE
    assert "Factoring" in client.prompts[0]


@pytest.mark.django_db
def test_summarize_note_falls_back_to_placeholder(monkeypatch, note):
    use_client(monkeypatch, FakeClient(None))
    result = ai.summarize_note(note)
    assert result.summary == ai.PLACEHOLDER_SUMMARY
    assert result.key_points == ai.DEFAULT_KEY_POINTS


@pytest.mark.django_db
def test_summarize_note_without_client_is_local(monkeypatch, note):
    use_client(monkeypatch, None)
    result = ai.summarize_note(note)
    assert result.summary == f"AI Summary: {note.content[:100]}..."
    assert result.key_points == ai.LOCAL_KEY_POINTS
    assert result.confidence == ai.LOCAL_CONFIDENCE


@pytest.mark.django_db
def test_translate_text_falls_back_to_mock(monkeypatch, student):
    use_client(monkeypatch, FakeClient(None))
    translation = ai.translate_text(student, "hello", "es")
    assert translation.translated_text == "TRANSLATED (ES): hello"
    assert translation.from_language == "auto"


@pytest.mark.django_db
def test_translate_text_uses_llm(monkeypatch, student, live_session):
    use_client(monkeypatch, FakeClient("  hola \n"))
    translation = ai.translate_text(student, "hello", "es", "en", session=live_session)
    assert translation.translated_text == "hola"
    assert translation.session == live_session


def test_summarize_text_takes_first_twenty_words():
    words = [f"w{i}" for i in range(25)]
    assert ai.summarize_text(" ".join(words)) == "SUMMARY: " + " ".join(words[:20]) + "..."
    assert ai.summarize_text("short text") == "SUMMARY: short text"
