"""Planner package exports."""

from .base import Planner
from .context import ContextAnalyzer
from .preferences import PreferenceExtractor
from .simple import RuleBasedPlanner
from .stage import StageResolver
from .types import (
    AcidityBand,
    ConversationContext,
    FlavorCategory,
    FollowUpTopic,
    PlannerContext,
    PlannerDecision,
    PriceRange,
    Roast,
    SpecialSort,
    Stage,
    UserPreferences,
)

__all__ = [
    "Planner",
    "ContextAnalyzer",
    "PreferenceExtractor",
    "RuleBasedPlanner",
    "StageResolver",
    "AcidityBand",
    "ConversationContext",
    "FlavorCategory",
    "FollowUpTopic",
    "PlannerContext",
    "PlannerDecision",
    "PriceRange",
    "Roast",
    "SpecialSort",
    "Stage",
    "UserPreferences",
]
