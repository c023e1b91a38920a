from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

import pytest

from barista.llm.base import TextGenerationService
from barista.search.catalog import CatalogItem, CatalogQueryService
from barista.search.query import SearchQuerySpec


class RecordingGenerator(TextGenerationService):
    """Returns a canned answer (or raises) and keeps every prompt it was given."""

    def __init__(self, answer: str = "Here are a few coffees you might enjoy.", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def generate(self, system_instructions: str, user_instructions: str) -> str:
        self.calls.append((system_instructions, user_instructions))
        if self.error is not None:
            raise self.error
        return self.answer


class ScriptedCatalog(CatalogQueryService):
    """Replays a list of responses; an exception in the script is raised instead of returned."""

    def __init__(self, responses: Sequence[list[CatalogItem] | Exception]):
        self.responses = list(responses)
        self.specs: list[SearchQuerySpec] = []

    async def search(self, spec: SearchQuerySpec) -> list[CatalogItem]:
        self.specs.append(spec)
        response = self.responses.pop(0) if self.responses else []
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def catalog_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "catalog.json"


@pytest.fixture
def chat_flavor_payload(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "chat_flavor.json").read_text(encoding="utf-8"))


@pytest.fixture
def chat_ready_payload(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "chat_ready.json").read_text(encoding="utf-8"))


@pytest.fixture
def generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
def failing_generator() -> RecordingGenerator:
    return RecordingGenerator(error=RuntimeError("model overloaded"))


@pytest.fixture
def scripted_catalog():
    return ScriptedCatalog
