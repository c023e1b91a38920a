"""Text generation service interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TextGenerationError(RuntimeError):
    """Raised when no text could be generated."""


class TextGenerationService(ABC):
    """Turns a system instruction and a user instruction into prose."""

    @abstractmethod
    async def generate(self, system_instructions: str, user_instructions: str) -> str:
        """Return generated text or raise :class:`TextGenerationError`."""
