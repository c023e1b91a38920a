"""Helpers converting between wire payloads and transcript turns."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from .models import ConversationTurn, Speaker

SPEAKER_LABELS = {
    Speaker.SHOPPER: "Customer",
    Speaker.ASSISTANT: "Assistant",
}


def turns_from_payload(entries: Any) -> list[ConversationTurn]:
    """Parse ``[{"role": ..., "content": ...}]`` into turns.

    Raises ``ValueError`` describing the first malformed entry.
    """

    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ValueError("conversationHistory must be a list")

    turns: list[ConversationTurn] = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"conversationHistory[{position}] must be an object")
        role = entry.get("role")
        content = entry.get("content")
        try:
            speaker = Speaker(role)
        except ValueError:
            raise ValueError(
                f"conversationHistory[{position}].role must be 'user' or 'assistant'"
            ) from None
        if not isinstance(content, str):
            raise ValueError(f"conversationHistory[{position}].content must be a string")
        turns.append(ConversationTurn(speaker=speaker, text=content))
    return turns


def shopper_texts(history: Iterable[ConversationTurn]) -> list[str]:
    return [turn.text for turn in history if turn.is_shopper]


def assistant_texts(history: Iterable[ConversationTurn]) -> list[str]:
    return [turn.text for turn in history if turn.is_assistant]


def format_transcript(history: Sequence[ConversationTurn]) -> str:
    """Render the transcript as labelled lines for the text generation prompt."""

    return "\n".join(f"{SPEAKER_LABELS[turn.speaker]}: {turn.text}" for turn in history)
