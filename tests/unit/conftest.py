"""Pytest unit test fixtures."""

import pytest

from barista.planner.simple import RuleBasedPlanner
from barista.search.catalog import LocalCatalog


@pytest.fixture()
def planner():
    return RuleBasedPlanner()


@pytest.fixture()
def local_catalog(catalog_path):
    return LocalCatalog(catalog_path)
