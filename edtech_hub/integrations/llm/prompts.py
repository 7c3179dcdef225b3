from __future__ import annotations

SYSTEM_PROMPT = "You are a helpful education assistant."


def build_note_summary_prompt(title: str, language: str, content: str) -> str:
    """Prompt asking for a short paragraph followed by 3-5 bullet points."""

    return (
        "You are an educational assistant. Summarize the student's note into a "
        "concise paragraph and 3-5 key bullet points.\n\n"
        f"Title: {title}\n"
        f"Language: {language}\n"
        "Content:\n"
        f"{content}\n"
    )


def build_translation_prompt(text: str, from_language: str, to_language: str) -> str:
    source = "the detected language" if from_language == "auto" else from_language
    return (
        f"Translate the following text from {source} to {to_language}. "
        "Reply with the translation only, without quotes or commentary.\n\n"
        f"{text}"
    )
