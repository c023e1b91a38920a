"""Primary search, a single relaxation pass and instruction template selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from barista.planner.types import SpecialSort, UserPreferences

from .catalog import CatalogItem, CatalogQueryService
from .query import RELAXATION_PRICE_INCREMENT, QueryBuilder, SearchQuerySpec, relax

logger = logging.getLogger("barista.search")


class InstructionTemplate(str, Enum):
    """Prompt blocks handed to the text generation service."""

    GREETING = "greeting"
    ASK_DETAILS = "ask_details"
    RECOMMENDATION = "recommendation"
    MOST_EXPENSIVE = "most_expensive"
    CHEAPEST = "cheapest"
    MOST_POPULAR = "most_popular"
    NO_MATCH = "no_match"
    SEARCH_FAILED = "search_failed"


SPECIAL_SORT_TEMPLATES: dict[SpecialSort, InstructionTemplate] = {
    SpecialSort.MOST_EXPENSIVE: InstructionTemplate.MOST_EXPENSIVE,
    SpecialSort.CHEAPEST: InstructionTemplate.CHEAPEST,
    SpecialSort.MOST_POPULAR: InstructionTemplate.MOST_POPULAR,
}


@dataclass(slots=True)
class SearchOutcome:
    template: InstructionTemplate
    spec: SearchQuerySpec
    items: list[CatalogItem] = field(default_factory=list)
    relaxed_spec: SearchQuerySpec | None = None
    catalog_calls: int = 0
    error: str | None = None

    @property
    def relaxed(self) -> bool:
        return self.relaxed_spec is not None

    def as_dict(self) -> dict[str, Any]:
        return {
            "template": self.template.value,
            "spec": self.spec.as_dict(),
            "relaxed_spec": self.relaxed_spec.as_dict() if self.relaxed_spec else None,
            "catalog_calls": self.catalog_calls,
            "result_count": len(self.items),
            "error": self.error,
        }


class SearchOrchestrator:
    """Run a preference search against the catalog, relaxing it at most once."""

    def __init__(
        self,
        catalog: CatalogQueryService,
        builder: QueryBuilder | None = None,
        *,
        price_increment: int = RELAXATION_PRICE_INCREMENT,
    ) -> None:
        self.catalog = catalog
        self.builder = builder or QueryBuilder()
        self.price_increment = price_increment

    async def run(self, preferences: UserPreferences) -> SearchOutcome:
        spec = self.builder.build(preferences)
        outcome = SearchOutcome(template=InstructionTemplate.SEARCH_FAILED, spec=spec)

        try:
            logger.debug("Primary catalog search: %s", spec.as_dict())
            outcome.catalog_calls += 1
            items = await self.catalog.search(spec)
            if not items:
                outcome.relaxed_spec = relax(spec, price_increment=self.price_increment)
                logger.debug("No exact match, relaxed search: %s", outcome.relaxed_spec.as_dict())
                outcome.catalog_calls += 1
                items = await self.catalog.search(outcome.relaxed_spec)
        except Exception as exc:  # noqa: BLE001 - degrade to an answer without products
            logger.exception("Catalog search failed", extra={"spec": spec.as_dict()})
            outcome.error = str(exc)
            return outcome

        outcome.items = list(items)
        outcome.template = self._select_template(preferences, outcome.items)
        return outcome

    @staticmethod
    def _select_template(preferences: UserPreferences, items: list[CatalogItem]) -> InstructionTemplate:
        if not items:
            return InstructionTemplate.NO_MATCH
        if preferences.special_sort is not None:
            return SPECIAL_SORT_TEMPLATES[preferences.special_sort]
        return InstructionTemplate.RECOMMENDATION
