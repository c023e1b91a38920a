"""Catalog query service backed by the Strapi REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .catalog import DEFAULT_SORT, CatalogError, CatalogItem, CatalogQueryService
from .query import SearchQuerySpec

PRODUCT_FIELDS = (
    "id",
    "name",
    "origin",
    "roast",
    "processing",
    "flavor_type",
    "flavor_tags",
    "acidity",
    "sweetness",
    "body",
    "price",
    "popularity",
    "description",
)


def build_strapi_params(spec: SearchQuerySpec, *, page_size_cap: int = 100) -> dict[str, str]:
    """Flatten a spec into Strapi's bracketed query parameters.

    ``filters[price][$gte]=400`` style keys; unbounded specs request one page
    of ``page_size_cap`` items.
    """

    filters: dict[str, dict[str, Any]] = {}

    def add(field: str, operator: str, value: Any) -> None:
        if value is not None:
            filters.setdefault(field, {})[operator] = value

    add("flavor_type", "$eq", spec.category)
    add("acidity", "$gte", spec.min_acidity)
    add("acidity", "$lte", spec.max_acidity)
    add("price", "$gte", spec.min_price)
    add("price", "$lte", spec.max_price)
    add("origin", "$eq", spec.origin)
    add("roast", "$eq", spec.roast)
    add("name", "$containsi", spec.name_substring)

    sort_key = spec.sort_key or DEFAULT_SORT
    params: dict[str, str] = {
        "pagination[page]": "1",
        "pagination[pageSize]": str(spec.limit if spec.limit is not None else page_size_cap),
        "sort[0]": f"{sort_key.field}:{'desc' if sort_key.descending else 'asc'}",
        "sort[1]": "name:asc",
    }
    for index, name in enumerate(PRODUCT_FIELDS):
        params[f"fields[{index}]"] = name
    for field_name, operators in filters.items():
        for operator, value in operators.items():
            params[f"filters[{field_name}][{operator}]"] = str(value)
    return params


class StrapiCatalogClient(CatalogQueryService):
    """Search the Strapi ``products`` collection."""

    def __init__(
        self,
        base_url: str,
        *,
        api_token: str | None = None,
        collection: str = "products",
        timeout: float = 15.0,
        page_size_cap: int = 100,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = str(base_url).rstrip("/")
        self.collection = collection
        self._timeout = timeout
        self._page_size_cap = page_size_cap
        self._transport = transport
        self._headers = {"Content-Type": "application/json"}
        if api_token:
            self._headers["Authorization"] = f"Bearer {api_token}"
        self._logger = logging.getLogger("barista.catalog.strapi")

    async def search(self, spec: SearchQuerySpec) -> list[CatalogItem]:
        params = build_strapi_params(spec, page_size_cap=self._page_size_cap)
        records = await self.fetch(self.collection, params)

        items = [CatalogItem.from_record(record) for record in records if isinstance(record, dict)]
        if spec.limit is not None:
            items = items[: spec.limit]
        return items

    async def fetch(self, collection: str, params: dict[str, str]) -> list[dict[str, Any]]:
        """GET a collection and return its ``data`` array."""

        url = f"{self.base_url}/api/{collection}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            message = _strapi_error_message(exc.response) or str(exc)
            raise CatalogError(f"Strapi returned {exc.response.status_code}: {message}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise CatalogError(f"Strapi request failed: {exc}") from exc

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            return []
        self._logger.debug("GET %s -> %d records", url, len(data))
        return data


def _strapi_error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message")
    return None
