"""Integration fixtures: the real app with a fixture catalog and a recording generator."""

import pytest
from fastapi.testclient import TestClient

from barista import main
from barista.assistant import CoffeeAssistant
from barista.core.metrics import MetricsCollector
from barista.planner.simple import RuleBasedPlanner
from barista.search.catalog import LocalCatalog
from barista.search.orchestrator import SearchOrchestrator


@pytest.fixture()
def assistant(catalog_path, generator):
    return CoffeeAssistant(
        RuleBasedPlanner(),
        SearchOrchestrator(LocalCatalog(catalog_path)),
        generator,
        metrics=main.metrics,
    )


@pytest.fixture()
def client(assistant):
    main.app.dependency_overrides[main.get_assistant] = lambda: assistant
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
