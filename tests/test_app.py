import pytest
from slowapi import Limiter
from slowapi.util import get_remote_address

from app import main
from app.config import Settings
from app.main import app


class TestHealthEndpoints:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}

    def test_root(self, client):
        assert client.get("/").json()["status"] == "healthy"

    def test_ready_probes_database(self, client, db):
        assert client.get("/ready").json() == {"status": "ready"}
        assert db.count("contacts_table", "select") == 1

    def test_ready_unavailable_when_database_fails(self, client, db):
        db.fail("contacts_table", "select", "connection refused")
        resp = client.get("/ready")
        assert resp.status_code == 503
        assert resp.json()["error"] == "connection refused"

    def test_security_headers(self, client):
        resp = client.get("/health")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"


class TestErrorEnvelope:
    def test_unknown_route(self, client):
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert "error" in resp.json()

    def test_malformed_body_is_400(self, client):
        resp = client.post("/contacts", content=b"{not json", headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_unexpected_error_is_generic(self, client, db, monkeypatch):
        def boom(name):
            raise RuntimeError("secret internals")

        monkeypatch.setattr(db, "table", boom)
        resp = client.get("/contacts")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Server error"}


class TestSettings:
    def test_cors_origins_list(self):
        s = Settings(cors_origins="http://a.test, http://b.test,,")
        assert s.get_cors_origins_list() == ["http://a.test", "http://b.test"]

    def test_table_names_from_env(self, monkeypatch):
        monkeypatch.setenv("EVENTS_TABLE", "events")
        assert Settings().events_table == "events"

    def test_is_production(self):
        assert Settings(environment="production").is_production
        assert not Settings(environment="development").is_production


class TestRateLimit:
    @pytest.fixture
    def strict_limiter(self, monkeypatch):
        strict = Limiter(key_func=get_remote_address, default_limits=["3/minute"])
        strict.exempt(main.health)
        monkeypatch.setattr(app.state, "limiter", strict)
        return strict

    def test_requests_past_limit_get_429(self, client, strict_limiter):
        codes = [client.get("/contacts").status_code for _ in range(5)]
        assert codes == [200, 200, 200, 429, 429]
        assert "error" in client.get("/contacts").json()

    def test_health_is_exempt(self, client, strict_limiter):
        assert all(client.get("/health").status_code == 200 for _ in range(6))
