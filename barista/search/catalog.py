"""Catalog query service interface and the local JSON implementation."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from .query import SearchQuerySpec, SortKey

logger = logging.getLogger("barista.catalog")

DEFAULT_SORT = SortKey.POPULARITY_DESC


class CatalogError(RuntimeError):
    """Raised when the catalog cannot be queried."""


@dataclass(slots=True)
class CatalogItem:
    """Read-only product record returned by a catalog backend."""

    name: str
    origin: str | None = None
    roast: str | None = None
    flavor_type: str | None = None
    flavor_tags: list[str] = field(default_factory=list)
    acidity: float | None = None
    sweetness: float | None = None
    body: float | None = None
    price: float | None = None
    popularity: float | None = None
    processing: str | None = None
    description: str | None = None
    id: int | str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CatalogItem":
        """Build an item from a flat record or one nested under ``attributes``."""

        attributes = record.get("attributes")
        data: Mapping[str, Any] = attributes if isinstance(attributes, Mapping) else record

        tags = data.get("flavor_tags") or []
        if isinstance(tags, str):
            tags = [tag.strip() for tag in tags.split(",") if tag.strip()]

        return cls(
            id=record.get("id", data.get("id")),
            name=str(data.get("name") or "Unnamed coffee"),
            origin=data.get("origin"),
            roast=data.get("roast"),
            flavor_type=data.get("flavor_type"),
            flavor_tags=[str(tag) for tag in tags],
            acidity=_number(data.get("acidity")),
            sweetness=_number(data.get("sweetness")),
            body=_number(data.get("body")),
            price=_number(data.get("price")),
            popularity=_number(data.get("popularity")),
            processing=data.get("processing"),
            description=data.get("description"),
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class CatalogQueryService(ABC):
    """Side-effect-free product search."""

    @abstractmethod
    async def search(self, spec: SearchQuerySpec) -> list[CatalogItem]:
        """Return items matching ``spec``, or an empty list."""

    def describe(self) -> str:
        return self.__doc__ or type(self).__name__


class LocalCatalog(CatalogQueryService):
    """Catalog backed by a JSON array of product records on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._items: list[CatalogItem] | None = None

    def available(self) -> bool:
        return self.path.exists()

    def load(self) -> list[CatalogItem]:
        if self._items is not None:
            return self._items
        if not self.path.exists():
            raise CatalogError(f"catalog file not found: {self.path}")

        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogError(f"failed to read catalog {self.path}: {exc}") from exc

        if isinstance(data, Mapping):
            data = data.get("data") or data.get("products")
        if not isinstance(data, list):
            raise CatalogError("expected a JSON array of product records")

        self._items = [CatalogItem.from_record(record) for record in data if isinstance(record, Mapping)]
        logger.info("Loaded %d catalog items from %s", len(self._items), self.path)
        return self._items

    async def search(self, spec: SearchQuerySpec) -> list[CatalogItem]:
        return apply_spec(self.load(), spec)


def apply_spec(items: Iterable[CatalogItem], spec: SearchQuerySpec) -> list[CatalogItem]:
    """Filter, sort and truncate ``items`` the way the Strapi query would."""

    matches = [item for item in items if _matches(item, spec)]

    sort_key = spec.sort_key or DEFAULT_SORT

    def rank(item: CatalogItem) -> tuple[float, str]:
        value = getattr(item, sort_key.field)
        if value is None:
            return float("inf"), item.name
        return (-value if sort_key.descending else value), item.name

    matches.sort(key=rank)

    if spec.limit is not None:
        return matches[: spec.limit]
    return matches


def _matches(item: CatalogItem, spec: SearchQuerySpec) -> bool:
    equalities = (
        (spec.category, item.flavor_type),
        (spec.origin, item.origin),
        (spec.roast, item.roast),
    )
    for expected, actual in equalities:
        if expected is not None and actual != expected:
            return False

    ranges = (
        (spec.min_acidity, spec.max_acidity, item.acidity),
        (spec.min_price, spec.max_price, item.price),
    )
    for low, high, value in ranges:
        if low is None and high is None:
            continue
        if value is None:
            return False
        if low is not None and value < low:
            return False
        if high is not None and value > high:
            return False

    if spec.name_substring is not None and spec.name_substring.casefold() not in item.name.casefold():
        return False
    return True


def _number(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
