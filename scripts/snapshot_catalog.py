#!/usr/bin/env python
"""Snapshot the Strapi product collection into the local JSON catalog format.

The local catalog lets the assistant run without Strapi (development, demos,
tests). Records are written flat, one object per product.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export Strapi products to a local catalog JSON file")
    parser.add_argument(
        "--strapi-url",
        default=os.environ.get("STRAPI_URL"),
        help="Strapi base URL (defaults to $STRAPI_URL).",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get("STRAPI_API_TOKEN"),
        help="Strapi API token (defaults to $STRAPI_API_TOKEN).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=REPO_ROOT / "data" / "catalog.json",
        help="Where to write the catalog JSON array.",
    )
    parser.add_argument("--page-size", type=int, default=100, help="Records requested per page.")
    parser.add_argument("--max-pages", type=int, default=20, help="Stop after this many pages.")
    return parser.parse_args()


async def fetch_all(strapi_url: str, token: str | None, page_size: int, max_pages: int) -> list[dict]:
    from barista.search.strapi import PRODUCT_FIELDS, StrapiCatalogClient  # noqa: WPS433

    client = StrapiCatalogClient(strapi_url, api_token=token)
    records: list[dict] = []
    for page in range(1, max_pages + 1):
        params = {
            "pagination[page]": str(page),
            "pagination[pageSize]": str(page_size),
            "sort[0]": "id:asc",
        }
        for index, name in enumerate(PRODUCT_FIELDS):
            params[f"fields[{index}]"] = name

        batch = await client.fetch(client.collection, params)
        for record in batch:
            attributes = record.get("attributes")
            records.append({"id": record.get("id"), **attributes} if isinstance(attributes, dict) else record)
        if len(batch) < page_size:
            break
    return records


def main() -> None:
    args = parse_args()
    if not args.strapi_url:
        raise SystemExit("Provide --strapi-url or set STRAPI_URL")

    if str(REPO_ROOT) not in sys.path:
        sys.path.insert(0, str(REPO_ROOT))

    records = asyncio.run(fetch_all(args.strapi_url, args.token, args.page_size, args.max_pages))

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Wrote {len(records)} products to {args.output}")


if __name__ == "__main__":
    main()
