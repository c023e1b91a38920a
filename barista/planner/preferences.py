"""Preference extraction from the shopper's side of the transcript.

Each preference dimension is an ordered ladder of ``(predicate, assignment)``
rules evaluated against the whole shopper text pool. The first rule whose
predicate holds assigns the dimension and the rest of that ladder is skipped,
so an early coarse statement is not overridden by a later, more specific one
within the same pass.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from barista.conversation.models import ConversationTurn
from barista.conversation.transcript import shopper_texts

from . import keywords
from .types import PriceRange, UserPreferences

Predicate = Callable[[str], bool]
Assignment = Callable[[str], Any]


@dataclass(frozen=True, slots=True)
class Rule:
    predicate: Predicate
    assign: Assignment


def contains_any(terms: Iterable[str]) -> Predicate:
    frozen = tuple(terms)
    return lambda text: any(term in text for term in frozen)


def constant(value: Any) -> Assignment:
    return lambda _text: value


def keyword_ladder(table: Sequence[tuple[Any, Sequence[str]]]) -> list[Rule]:
    return [Rule(contains_any(terms), constant(value)) for value, terms in table]


def first_match(text: str, ladder: Sequence[Rule]) -> Any:
    for rule in ladder:
        if rule.predicate(text):
            return rule.assign(text)
    return None


def build_text_pool(question: str, history: Sequence[ConversationTurn]) -> str:
    """Case-folded concatenation of every shopper turn plus the in-flight question."""

    return "\n".join([*shopper_texts(history), question]).casefold()


class PreferenceExtractor:
    """Derive :class:`UserPreferences` from shopper text using keyword ladders."""

    def __init__(
        self,
        *,
        flavor_keywords=keywords.FLAVOR_KEYWORDS,
        acidity_keywords=keywords.ACIDITY_KEYWORDS,
        budget_patterns: Sequence[re.Pattern[str]] = keywords.BUDGET_PATTERNS,
        min_budget: int = keywords.MIN_BUDGET,
        price_keywords=keywords.PRICE_KEYWORDS,
        roast_patterns=keywords.ROAST_PATTERNS,
        origins=keywords.ORIGINS,
        varieties=keywords.VARIETIES,
        processing_methods=keywords.PROCESSING_METHODS,
        special_sort_keywords=keywords.SPECIAL_SORT_KEYWORDS,
    ) -> None:
        self._budget_patterns = tuple(budget_patterns)
        self._min_budget = min_budget
        self._ladders: dict[str, list[Rule]] = {
            "flavor_category": keyword_ladder(flavor_keywords),
            "acidity_band": keyword_ladder(acidity_keywords),
            "price": [
                Rule(lambda text: self._find_budget(text) is not None, self._budget_range),
                *keyword_ladder(price_keywords),
            ],
            "roast": [
                Rule(lambda text, pattern=pattern: pattern.search(text) is not None, constant(roast))
                for roast, pattern in roast_patterns
            ],
            "origin": keyword_ladder(origins),
            # Processing methods are only consulted when no variety matched.
            "specific_name": keyword_ladder(varieties) + keyword_ladder(processing_methods),
            "special_sort": keyword_ladder(special_sort_keywords),
        }

    def extract(self, question: str, history: Sequence[ConversationTurn] = ()) -> UserPreferences:
        pool = build_text_pool(question, history)
        return UserPreferences(**{name: first_match(pool, ladder) for name, ladder in self._ladders.items()})

    def _find_budget(self, text: str) -> int | None:
        for pattern in self._budget_patterns:
            for match in pattern.finditer(text):
                amount = int(match.group(1).replace(",", ""))
                if amount >= self._min_budget:
                    return amount
        return None

    def _budget_range(self, text: str) -> PriceRange:
        return PriceRange(budget=self._find_budget(text))
