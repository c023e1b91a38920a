"""Baseline rule-based planner implementation."""

from __future__ import annotations

from .base import Planner
from .context import ContextAnalyzer
from .preferences import PreferenceExtractor
from .stage import StageResolver
from .types import PlannerContext, PlannerDecision


class RuleBasedPlanner(Planner):
    """Keyword planner: extraction and analysis feed an ordered stage triage."""

    def __init__(
        self,
        extractor: PreferenceExtractor | None = None,
        analyzer: ContextAnalyzer | None = None,
        resolver: StageResolver | None = None,
    ) -> None:
        self.extractor = extractor or PreferenceExtractor()
        self.analyzer = analyzer or ContextAnalyzer()
        self.resolver = resolver or StageResolver()

    def describe(self) -> str:
        return "Rule-based keyword planner"

    def decide(self, context: PlannerContext) -> PlannerDecision:
        preferences = self.extractor.extract(context.question, context.history)
        signals = self.analyzer.analyze(context.question, context.history)
        resolution = self.resolver.resolve(context.question, preferences, signals)

        return PlannerDecision(
            stage=resolution.stage,
            preferences=preferences,
            context=signals,
            follow_up_topics=resolution.follow_up_topics,
            rule=resolution.rule,
        )
