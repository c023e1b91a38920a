"""FastAPI application entry point for the coffee assistant backend."""

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from barista.api.assistant import create_assistant_router
from barista.assistant import CoffeeAssistant
from barista.core.config import Settings, get_settings
from barista.core.errors import HttpError, http_error_handler, unhandled_exception_handler
from barista.core.logging import configure_logging, request_id_middleware
from barista.core.metrics import MetricsCollector
from barista.llm.gemini import GeminiClient
from barista.planner.simple import RuleBasedPlanner
from barista.search.catalog import CatalogQueryService, LocalCatalog
from barista.search.orchestrator import SearchOrchestrator
from barista.search.query import QueryBuilder
from barista.search.strapi import StrapiCatalogClient

settings = get_settings()
logger = logging.getLogger("barista.app")


def build_catalog(config: Settings) -> CatalogQueryService:
    """Use Strapi when configured, otherwise the local JSON catalog."""

    if config.strapi_url is not None:
        return StrapiCatalogClient(
            str(config.strapi_url),
            api_token=config.strapi_api_token,
            timeout=config.http_timeout_seconds,
            page_size_cap=config.strapi_page_size_cap,
        )
    return LocalCatalog(config.catalog_path)


metrics = MetricsCollector()
catalog = build_catalog(settings)
text_generator = GeminiClient(
    settings.gemini_api_key,
    model=settings.gemini_model,
    base_url=settings.gemini_base_url,
    max_retries=settings.gemini_max_retries,
    base_delay_ms=settings.gemini_base_delay_ms,
    timeout=settings.http_timeout_seconds,
)
assistant = CoffeeAssistant(
    planner=RuleBasedPlanner(),
    orchestrator=SearchOrchestrator(
        catalog,
        QueryBuilder(limit=settings.recommendation_limit, budget_headroom=settings.budget_headroom),
        price_increment=settings.relaxation_price_increment,
    ),
    generator=text_generator,
    reply_language=settings.reply_language,
    metrics=metrics,
)


def get_assistant() -> CoffeeAssistant:
    """Dependency injector for the assistant engine."""

    return assistant


app = FastAPI(title=settings.app_name, version="0.1.0", docs_url="/docs")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_id_middleware)

app.include_router(create_assistant_router(get_assistant, expose_debug=settings.expose_debug))


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Return basic service status for monitoring."""

    return {"status": "ok"}


@app.get("/ready", tags=["health"])
async def readiness_probe() -> dict[str, Any]:
    """Report whether the catalog and the text generation service are usable."""

    if isinstance(catalog, LocalCatalog):
        catalog_component = {
            "backend": "local",
            "path": str(catalog.path),
            "ok": catalog.available(),
        }
    else:
        catalog_component = {"backend": "strapi", "ok": settings.strapi_enabled}

    components: dict[str, dict[str, Any]] = {
        "catalog": catalog_component,
        "text_generation": {"model": settings.gemini_model, "ok": settings.gemini_enabled},
    }
    overall = "ok" if all(component["ok"] for component in components.values()) else "degraded"

    return {
        "status": overall,
        "environment": settings.environment,
        "components": components,
    }


@app.on_event("startup")
async def startup_logging() -> None:
    level = configure_logging(settings.log_level)
    logger.info("Logging configured at %s level for %s environment", logging.getLevelName(level), settings.environment)
    if not settings.gemini_enabled:
        logger.warning("GEMINI_API_KEY is not set; chat replies will fall back to the apology message")


app.add_exception_handler(HttpError, http_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get("/metrics", tags=["metrics"])
async def metrics_endpoint() -> dict:
    snapshot = metrics.snapshot()
    return {
        "total_turns": snapshot.total_turns,
        "stages": snapshot.stages,
        "templates": snapshot.templates,
        "relaxed_searches": snapshot.relaxed_searches,
        "catalog_failures": snapshot.catalog_failures,
        "generation_failures": snapshot.generation_failures,
    }
