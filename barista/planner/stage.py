"""Stage resolution as an ordered triage of predicates.

The stage is never stored. It is recomputed from the transcript on every call,
so a replayed or reordered request always lands on the stage its transcript
implies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from . import keywords
from .types import ConversationContext, FollowUpTopic, Stage, UserPreferences

MAX_QUESTIONS_BEFORE_RECOMMENDING = 3
MAX_FOLLOW_UP_TOPICS = 2


@dataclass(frozen=True, slots=True)
class StageInputs:
    message: str
    preferences: UserPreferences
    context: ConversationContext
    direct_request: bool
    extra_signal: bool = False


@dataclass(frozen=True, slots=True)
class StageRule:
    name: str
    applies: Callable[[StageInputs], bool]
    stage: Stage


def _has_detail(inputs: StageInputs) -> bool:
    prefs = inputs.preferences
    if prefs.flavor_category is None:
        return False
    if inputs.extra_signal:
        return True
    has_detail = any(value is not None for value in (prefs.acidity_band, prefs.price, prefs.roast))
    # Details volunteered before the assistant asked anything leave room for one round of questions.
    return has_detail and inputs.context.assistant_question_count >= 1


STAGE_RULES: tuple[StageRule, ...] = (
    StageRule(
        "direct_request",
        lambda i: i.direct_request and i.preferences.has_any(),
        Stage.READY_TO_RECOMMEND,
    ),
    StageRule(
        "question_budget_spent",
        lambda i: i.context.assistant_question_count >= MAX_QUESTIONS_BEFORE_RECOMMENDING
        and i.preferences.flavor_category is not None,
        Stage.READY_TO_RECOMMEND,
    ),
    StageRule(
        "impatient",
        lambda i: i.context.shows_impatience
        and any(
            value is not None
            for value in (i.preferences.flavor_category, i.preferences.price, i.preferences.roast)
        ),
        Stage.READY_TO_RECOMMEND,
    ),
    StageRule(
        "expert",
        lambda i: i.context.is_expert and i.preferences.flavor_category is not None,
        Stage.READY_TO_RECOMMEND,
    ),
    StageRule(
        "special_sort",
        lambda i: i.preferences.special_sort is not None,
        Stage.READY_TO_RECOMMEND,
    ),
    StageRule(
        "enough_detail",
        lambda i: i.preferences.specific_name is not None or _has_detail(i),
        Stage.READY_TO_RECOMMEND,
    ),
    StageRule(
        "flavor_only",
        lambda i: i.preferences.flavor_category is not None,
        Stage.FLAVOR_SELECTED,
    ),
)


@dataclass(frozen=True, slots=True)
class Resolution:
    stage: Stage
    rule: str
    follow_up_topics: tuple[FollowUpTopic, ...] = ()


class StageResolver:
    """Pick the conversational stage and, at ``FLAVOR_SELECTED``, what to ask next."""

    def __init__(
        self,
        *,
        rules: Sequence[StageRule] = STAGE_RULES,
        direct_request_keywords: Sequence[str] = keywords.DIRECT_REQUEST_KEYWORDS,
        max_topics: int = MAX_FOLLOW_UP_TOPICS,
    ) -> None:
        self._rules = tuple(rules)
        self._direct_request_keywords = tuple(direct_request_keywords)
        self._max_topics = max_topics

    def evaluate(
        self,
        message: str,
        preferences: UserPreferences,
        context: ConversationContext,
        *,
        extra_signal: bool = False,
    ) -> tuple[Stage, str]:
        """Return the first matching rule's stage and name, ``INITIAL`` when none applies."""

        lowered = message.casefold()
        inputs = StageInputs(
            message=lowered,
            preferences=preferences,
            context=context,
            direct_request=any(term in lowered for term in self._direct_request_keywords),
            extra_signal=extra_signal,
        )
        for rule in self._rules:
            if rule.applies(inputs):
                return rule.stage, rule.name
        return Stage.INITIAL, "default"

    def resolve(self, message: str, preferences: UserPreferences, context: ConversationContext) -> Resolution:
        stage, rule = self.evaluate(message, preferences, context)
        if stage is not Stage.FLAVOR_SELECTED:
            return Resolution(stage=stage, rule=rule)

        topics = self.follow_up_topics(preferences, context)
        if topics:
            return Resolution(stage=stage, rule=rule, follow_up_topics=topics)

        # Nothing left to ask: re-enter once with one extra signal instead of asking a vacuous question.
        stage, rule = self.evaluate(message, preferences, context, extra_signal=True)
        return Resolution(stage=stage, rule=f"{rule}:forced")

    def follow_up_topics(
        self,
        preferences: UserPreferences,
        context: ConversationContext,
    ) -> tuple[FollowUpTopic, ...]:
        covered = {
            FollowUpTopic.ACIDITY: context.asked_about_acidity or preferences.acidity_band is not None,
            FollowUpTopic.PRICE: context.asked_about_price or preferences.price is not None,
            FollowUpTopic.ROAST: context.asked_about_roast or preferences.roast is not None,
        }
        remaining = [topic for topic in FollowUpTopic if not covered[topic]]
        return tuple(remaining[: self._max_topics])
