from barista.core.config import Settings


def test_default_cors_origins_point_at_dev_server():
    settings = Settings(_env_file=None)

    assert settings.cors_origins == ["http://localhost:5173", "http://127.0.0.1:5173"]
    assert not settings.strapi_enabled


def test_cors_origins_are_deduplicated():
    settings = Settings(
        _env_file=None,
        frontend_origin="https://shop.example.com/",
        additional_origins=["https://shop.example.com", "https://admin.example.com"],
    )

    assert settings.cors_origins == ["https://shop.example.com", "https://admin.example.com"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STRAPI_URL", "http://localhost:1337")
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("RECOMMENDATION_LIMIT", "3")

    settings = Settings(_env_file=None)

    assert settings.strapi_enabled
    assert settings.gemini_enabled
    assert settings.recommendation_limit == 3
