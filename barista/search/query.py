"""Search specifications and their construction from shopper preferences."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any

from barista.planner.types import AcidityBand, FlavorCategory, SpecialSort, UserPreferences

DEFAULT_LIMIT = 5
BUDGET_HEADROOM = 100
RELAXATION_PRICE_INCREMENT = 200


class SortKey(str, Enum):
    PRICE_DESC = "price desc"
    PRICE_ASC = "price asc"
    POPULARITY_DESC = "popularity desc"

    @property
    def field(self) -> str:
        return self.value.split()[0]

    @property
    def descending(self) -> bool:
        return self.value.endswith("desc")


CATEGORY_TOKENS: dict[FlavorCategory, str] = {
    FlavorCategory.FRUITY: "Fruity",
    FlavorCategory.FLORAL: "Floral",
    FlavorCategory.NUTTY: "Nutty",
    FlavorCategory.BOLD: "Bold",
}

ACIDITY_BOUNDS: dict[AcidityBand, tuple[int | None, int | None]] = {
    AcidityBand.HIGH: (4, None),
    AcidityBand.LOW: (None, 3),
    AcidityBand.MEDIUM: (3, 4),
}

SPECIAL_SORT_KEYS: dict[SpecialSort, SortKey] = {
    SpecialSort.MOST_EXPENSIVE: SortKey.PRICE_DESC,
    SpecialSort.CHEAPEST: SortKey.PRICE_ASC,
    SpecialSort.MOST_POPULAR: SortKey.POPULARITY_DESC,
}


@dataclass(frozen=True, slots=True)
class SearchQuerySpec:
    """Catalog search request. ``limit=None`` means unbounded."""

    category: str | None = None
    min_acidity: int | None = None
    max_acidity: int | None = None
    min_price: int | None = None
    max_price: int | None = None
    origin: str | None = None
    roast: str | None = None
    name_substring: str | None = None
    sort_key: SortKey | None = None
    limit: int | None = DEFAULT_LIMIT

    def as_dict(self) -> dict[str, Any]:
        payload = {key: value for key, value in asdict(self).items() if value is not None}
        if self.sort_key is not None:
            payload["sort_key"] = self.sort_key.value
        return payload


class QueryBuilder:
    """Map :class:`UserPreferences` to a :class:`SearchQuerySpec`.

    The search modes form a total order and are never combined:

    1. ``special_sort`` -- sort the whole catalog, fixed limit, no filters.
    2. ``specific_name`` -- name substring search, unbounded, no filters.
    3. filters composed from flavor, acidity, price, roast and origin.
    """

    def __init__(self, *, limit: int = DEFAULT_LIMIT, budget_headroom: int = BUDGET_HEADROOM) -> None:
        self.limit = limit
        self.budget_headroom = budget_headroom

    def build(self, preferences: UserPreferences) -> SearchQuerySpec:
        if preferences.special_sort is not None:
            return SearchQuerySpec(sort_key=SPECIAL_SORT_KEYS[preferences.special_sort], limit=self.limit)
        if preferences.specific_name is not None:
            return SearchQuerySpec(name_substring=preferences.specific_name, limit=None)
        return self._compose_filters(preferences)

    def _compose_filters(self, preferences: UserPreferences) -> SearchQuerySpec:
        min_acidity = max_acidity = None
        if preferences.acidity_band is not None:
            min_acidity, max_acidity = ACIDITY_BOUNDS[preferences.acidity_band]

        min_price = max_price = None
        price = preferences.price
        if price is not None:
            if price.budget is not None:
                max_price = price.budget + self.budget_headroom
            else:
                min_price, max_price = price.minimum, price.maximum

        return SearchQuerySpec(
            category=CATEGORY_TOKENS[preferences.flavor_category] if preferences.flavor_category else None,
            min_acidity=min_acidity,
            max_acidity=max_acidity,
            min_price=min_price,
            max_price=max_price,
            origin=preferences.origin,
            roast=preferences.roast.value if preferences.roast else None,
            limit=self.limit,
        )


def relax(spec: SearchQuerySpec, *, price_increment: int = RELAXATION_PRICE_INCREMENT) -> SearchQuerySpec:
    """Widen a spec after an empty result: drop acidity bounds and lift the price ceiling."""

    max_price = spec.max_price + price_increment if spec.max_price is not None else None
    return replace(spec, min_acidity=None, max_acidity=None, max_price=max_price)
