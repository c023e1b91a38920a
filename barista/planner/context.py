"""Behavioural signal extraction over the full transcript."""

from __future__ import annotations

from typing import Mapping, Sequence

from barista.conversation.models import ConversationTurn, Speaker

from . import keywords
from .types import ConversationContext, FollowUpTopic


class ContextAnalyzer:
    """Count assistant questions and detect impatience, expertise and covered topics."""

    def __init__(
        self,
        *,
        impatience_keywords: Sequence[str] = keywords.IMPATIENCE_KEYWORDS,
        expert_keywords: Sequence[str] = keywords.EXPERT_KEYWORDS,
        topic_keywords: Mapping[FollowUpTopic, Sequence[str]] = keywords.TOPIC_KEYWORDS,
        question_marks: Sequence[str] = keywords.QUESTION_MARKS,
    ) -> None:
        self._impatience = tuple(impatience_keywords)
        self._expert = tuple(expert_keywords)
        self._topics = {topic: tuple(terms) for topic, terms in topic_keywords.items()}
        self._question_marks = tuple(question_marks)

    def analyze(self, question: str, history: Sequence[ConversationTurn] = ()) -> ConversationContext:
        """Return the signals for ``history`` with ``question`` treated as the newest shopper turn."""

        turns = [*history, ConversationTurn(speaker=Speaker.SHOPPER, text=question)]
        shopper = [turn.text.casefold() for turn in turns if turn.is_shopper]
        assistant = [turn.text.casefold() for turn in turns if turn.is_assistant]

        asked = {
            topic: any(_contains_any(text, terms) for text in assistant)
            for topic, terms in self._topics.items()
        }

        return ConversationContext(
            assistant_question_count=sum(
                1 for text in assistant if _contains_any(text, self._question_marks)
            ),
            shows_impatience=any(_contains_any(text, self._impatience) for text in shopper),
            is_expert=any(_contains_any(text, self._expert) for text in shopper),
            asked_about_acidity=asked.get(FollowUpTopic.ACIDITY, False),
            asked_about_price=asked.get(FollowUpTopic.PRICE, False),
            asked_about_roast=asked.get(FollowUpTopic.ROAST, False),
        )


def _contains_any(text: str, terms: Sequence[str]) -> bool:
    return any(term in text for term in terms)
