def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_reports_components(client):
    payload = client.get("/ready").json()

    assert payload["status"] in {"ok", "degraded"}
    assert set(payload["components"]) == {"catalog", "text_generation"}
    assert "ok" in payload["components"]["catalog"]


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_is_generated_when_missing(client):
    response = client.get("/health")

    assert response.headers.get("X-Request-ID")
