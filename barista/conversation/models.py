"""Dataclasses representing the conversation transcript supplied by the storefront."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Speaker(str, Enum):
    """Author of a conversational turn. Values match the storefront wire roles."""

    SHOPPER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    """Single immutable turn of the transcript, oldest first in a history list."""

    speaker: Speaker
    text: str

    @property
    def is_shopper(self) -> bool:
        return self.speaker is Speaker.SHOPPER

    @property
    def is_assistant(self) -> bool:
        return self.speaker is Speaker.ASSISTANT
