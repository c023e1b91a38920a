import asyncio

from barista.planner.types import AcidityBand, FlavorCategory, PriceRange, SpecialSort, UserPreferences
from barista.search.catalog import CatalogError, CatalogItem
from barista.search.orchestrator import InstructionTemplate, SearchOrchestrator


def run(orchestrator, preferences):
    return asyncio.run(orchestrator.run(preferences))


FRUITY_HIGH = UserPreferences(
    flavor_category=FlavorCategory.FRUITY,
    acidity_band=AcidityBand.HIGH,
    price=PriceRange(maximum=2000),
)


def test_primary_hit_is_a_recommendation(scripted_catalog):
    catalog = scripted_catalog([[CatalogItem(name="Guji")]])
    outcome = run(SearchOrchestrator(catalog), FRUITY_HIGH)

    assert outcome.template is InstructionTemplate.RECOMMENDATION
    assert outcome.catalog_calls == 1
    assert not outcome.relaxed
    assert [item.name for item in outcome.items] == ["Guji"]


def test_empty_primary_relaxes_once(scripted_catalog):
    catalog = scripted_catalog([[], [CatalogItem(name="Nearby")]])
    outcome = run(SearchOrchestrator(catalog), FRUITY_HIGH)

    assert outcome.template is InstructionTemplate.RECOMMENDATION
    assert outcome.relaxed
    assert outcome.catalog_calls == 2
    relaxed = catalog.specs[1]
    assert relaxed.min_acidity is None
    assert relaxed.max_acidity is None
    assert relaxed.max_price == 2200
    assert relaxed.category == "Fruity"
    assert outcome.as_dict()["relaxed_spec"]["max_price"] == 2200


def test_relaxation_never_loops(scripted_catalog):
    catalog = scripted_catalog([[], [], [CatalogItem(name="Too late")]])
    outcome = run(SearchOrchestrator(catalog), FRUITY_HIGH)

    assert outcome.template is InstructionTemplate.NO_MATCH
    assert outcome.catalog_calls == 2
    assert len(catalog.specs) == 2
    assert outcome.items == []


def test_catalog_failure_degrades_to_search_failed(scripted_catalog):
    catalog = scripted_catalog([CatalogError("Strapi returned 503: unavailable")])
    outcome = run(SearchOrchestrator(catalog), FRUITY_HIGH)

    assert outcome.template is InstructionTemplate.SEARCH_FAILED
    assert outcome.error == "Strapi returned 503: unavailable"
    assert outcome.catalog_calls == 1


def test_failure_during_relaxed_search(scripted_catalog):
    catalog = scripted_catalog([[], TimeoutError("slow")])
    outcome = run(SearchOrchestrator(catalog), FRUITY_HIGH)

    assert outcome.template is InstructionTemplate.SEARCH_FAILED
    assert outcome.catalog_calls == 2


def test_special_sort_template(scripted_catalog):
    catalog = scripted_catalog([[CatalogItem(name="Flagship", price=2000)]])
    outcome = run(SearchOrchestrator(catalog), UserPreferences(special_sort=SpecialSort.MOST_EXPENSIVE))

    assert outcome.template is InstructionTemplate.MOST_EXPENSIVE
    assert catalog.specs[0].as_dict() == {"sort_key": "price desc", "limit": 5}


def test_custom_price_increment(scripted_catalog):
    catalog = scripted_catalog([[], []])
    run(SearchOrchestrator(catalog, price_increment=500), UserPreferences(price=PriceRange(budget=400)))

    assert catalog.specs[0].max_price == 500
    assert catalog.specs[1].max_price == 1000
