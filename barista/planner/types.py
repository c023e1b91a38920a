"""Planner-related enums and data structures."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Sequence

from barista.conversation.models import ConversationTurn


class FlavorCategory(str, Enum):
    """Flavor families the catalog is organised into."""

    FRUITY = "fruity"
    FLORAL = "floral"
    NUTTY = "nutty"
    BOLD = "bold"


class AcidityBand(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Roast(str, Enum):
    """Roast levels, valued with the catalog's own tokens."""

    LIGHT = "Light"
    MEDIUM = "Medium"
    DARK = "Dark"


class SpecialSort(str, Enum):
    MOST_EXPENSIVE = "most_expensive"
    CHEAPEST = "cheapest"
    MOST_POPULAR = "most_popular"


class Stage(str, Enum):
    """How far the preference-gathering dialogue has progressed."""

    INITIAL = "initial"
    FLAVOR_SELECTED = "flavor_selected"
    READY_TO_RECOMMEND = "ready_to_recommend"


class FollowUpTopic(str, Enum):
    ACIDITY = "acidity"
    PRICE = "price"
    ROAST = "roast"


@dataclass(frozen=True, slots=True)
class PriceRange:
    """Either a single ``budget`` or a ``minimum``/``maximum`` pair."""

    budget: int | None = None
    minimum: int | None = None
    maximum: int | None = None

    def as_dict(self) -> dict[str, int]:
        payload = {"budget": self.budget, "min": self.minimum, "max": self.maximum}
        return {key: value for key, value in payload.items() if value is not None}


@dataclass(frozen=True, slots=True)
class UserPreferences:
    """Preferences extracted from the shopper's side of the transcript."""

    flavor_category: FlavorCategory | None = None
    acidity_band: AcidityBand | None = None
    price: PriceRange | None = None
    roast: Roast | None = None
    origin: str | None = None
    specific_name: str | None = None
    special_sort: SpecialSort | None = None

    def has_any(self) -> bool:
        return any(getattr(self, item.name) is not None for item in fields(self))

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            if isinstance(value, PriceRange):
                payload[item.name] = value.as_dict()
            elif isinstance(value, Enum):
                payload[item.name] = value.value
            else:
                payload[item.name] = value
        return payload


@dataclass(frozen=True, slots=True)
class ConversationContext:
    """Behavioural signals read from both sides of the transcript."""

    assistant_question_count: int = 0
    shows_impatience: bool = False
    is_expert: bool = False
    asked_about_acidity: bool = False
    asked_about_price: bool = False
    asked_about_roast: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


@dataclass(slots=True)
class PlannerContext:
    """Inputs passed to the planner when resolving a turn."""

    question: str
    history: Sequence[ConversationTurn] = field(default_factory=tuple)


@dataclass(slots=True)
class PlannerDecision:
    """Planner output: the derived stage and everything it was derived from."""

    stage: Stage
    preferences: UserPreferences
    context: ConversationContext
    follow_up_topics: tuple[FollowUpTopic, ...] = ()
    rule: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage.value,
            "rule": self.rule,
            "preferences": self.preferences.as_dict(),
            "context": self.context.as_dict(),
            "follow_up_topics": [topic.value for topic in self.follow_up_topics],
        }
