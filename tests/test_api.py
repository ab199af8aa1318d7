"""Tests for FastAPI endpoints -- analysis, settings, scenario catalog, health."""

import pytest
from httpx import ASGITransport, AsyncClient

from influence_engine.main import app, get_repository
from influence_engine.storage import InMemoryStore, SettingsRepository
from tests.conftest import account_payload


@pytest.fixture
def repository():
    repo = SettingsRepository(InMemoryStore())
    app.dependency_overrides[get_repository] = lambda: repo
    yield repo
    app.dependency_overrides.clear()


def client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestAnalyzeEndpoints:
    @pytest.mark.asyncio
    async def test_analyze_account(self, repository):
        async with client() as c:
            resp = await c.post("/api/analyze/account", json={"account": account_payload()})
        assert resp.status_code == 200
        data = resp.json()
        assert data["metrics"]["influence_index"] == pytest.approx(4.3999)
        assert data["metrics"]["scenarios"]["recommended_scenario"] == "activity_scenario"
        assert data["recommended"]["key"] == "activity_scenario"
        assert repository.load_blogger_data().id == "acc-ref"
        assert repository.load_blogger_results()["blogger"]["id"] == "acc-ref"

    @pytest.mark.asyncio
    async def test_analyze_account_raw_mode(self, repository):
        async with client() as c:
            resp = await c.post(
                "/api/analyze/account",
                json={"account": account_payload(), "optimality_mode": "raw"},
            )
        assert resp.json()["metrics"]["scenarios"]["recommended_scenario"] == "education_scenario"

    @pytest.mark.asyncio
    async def test_analyze_account_uses_saved_catalog(self, repository):
        async with client() as c:
            await c.post("/api/scenarios", json={"name": "Giveaway", "cost": 0.3})
            resp = await c.post("/api/analyze/account", json={"account": account_payload()})
        scenarios = resp.json()["metrics"]["scenarios"]
        assert "custom_scenario_5" in scenarios
        assert scenarios["optimality_mode"] == "raw"

    @pytest.mark.asyncio
    async def test_invalid_account_returns_422(self, repository):
        async with client() as c:
            resp = await c.post("/api/analyze/account", json={"account": account_payload(subscribers=0)})
        assert resp.status_code == 422
        assert "subscribers must be greater than 0" in resp.json()["detail"]["problems"]

    @pytest.mark.asyncio
    async def test_missing_field_returns_422(self, repository):
        payload = account_payload()
        del payload["likes"]
        async with client() as c:
            resp = await c.post("/api/analyze/account", json={"account": payload})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_analyze_batch(self, repository):
        accounts = [account_payload(id="a"), account_payload(id="b", subscriptions=250)]
        async with client() as c:
            resp = await c.post("/api/analyze/batch", json={"accounts": accounts})
        assert resp.status_code == 200
        data = resp.json()
        assert data["ranking"] == ["b", "a"]
        assert data["sustainability_ranking"] == ["a", "b"]
        assert [r.id for r in repository.load_business_data()] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_analyze_empty_batch(self, repository):
        async with client() as c:
            resp = await c.post("/api/analyze/batch", json={"accounts": []})
        assert resp.json()["ranking"] == []


class TestProbabilityEndpoint:
    @pytest.mark.asyncio
    async def test_default_without_saved_account(self, repository):
        async with client() as c:
            resp = await c.get("/api/scenarios/collaboration_scenario/probability")
        assert resp.json()["probability"] == 50.0
        assert resp.json()["based_on_account"] is None

    @pytest.mark.asyncio
    async def test_uses_last_analysed_account(self, repository):
        async with client() as c:
            await c.post("/api/analyze/account", json={"account": account_payload()})
            resp = await c.get("/api/scenarios/collaboration_scenario/probability")
        assert resp.json()["probability"] == pytest.approx(85.0)
        assert resp.json()["based_on_account"] == "acc-ref"


class TestSettingsEndpoints:
    @pytest.mark.asyncio
    async def test_get_defaults(self, repository):
        async with client() as c:
            resp = await c.get("/api/settings/business")
        assert resp.json()["settings"]["optimality_weights"]["alpha"] == 0.5
        assert resp.json()["warnings"] == []

    @pytest.mark.asyncio
    async def test_put_saves_with_warnings(self, repository):
        async with client() as c:
            resp = await c.put("/api/settings/blogger", json={"ii_weights": {"followers_ratio": 0.5}})
            assert resp.status_code == 200
            assert len(resp.json()["warnings"]) == 1
            saved = await c.get("/api/settings/blogger")
        assert saved.json()["settings"]["ii_weights"]["followers_ratio"] == 0.5

    @pytest.mark.asyncio
    async def test_put_invalid_returns_422(self, repository):
        async with client() as c:
            resp = await c.put("/api/settings/business", json={"si_weights": {"reach_consistency": -1}})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_mode_returns_422(self, repository):
        async with client() as c:
            resp = await c.get("/api/settings/agency")
        assert resp.status_code == 422


class TestScenarioEndpoints:
    @pytest.mark.asyncio
    async def test_list_defaults(self, repository):
        async with client() as c:
            resp = await c.get("/api/scenarios")
        assert [s["id"] for s in resp.json()] == [1, 2, 3, 4]
        assert all(s["isActive"] for s in resp.json())

    @pytest.mark.asyncio
    async def test_create_with_negative_cost_returns_422(self, repository):
        async with client() as c:
            resp = await c.post("/api/scenarios", json={"name": "Giveaway", "cost": -5.0})
        assert resp.status_code == 422
        assert [d.id for d in repository.load_scenario_catalog().all()] == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_toggle_and_delete(self, repository):
        async with client() as c:
            toggled = await c.post("/api/scenarios/2/toggle")
            created = await c.post("/api/scenarios", json={"name": "Giveaway"})
            deleted = await c.delete(f"/api/scenarios/{created.json()['id']}")
            builtin = await c.delete("/api/scenarios/1")
            missing = await c.post("/api/scenarios/99/toggle")
        assert toggled.json()["isActive"] is False
        assert deleted.status_code == 200
        assert builtin.status_code == 400
        assert missing.status_code == 404
        assert [d.id for d in repository.load_scenario_catalog().all()] == [1, 2, 3, 4]


class TestMiscEndpoints:
    @pytest.mark.asyncio
    async def test_metrics(self, repository):
        async with client() as c:
            resp = await c.get("/api/metrics")
        assert {m["symbol"] for m in resp.json()} == {"FR", "GR", "ER", "SA"}

    @pytest.mark.asyncio
    async def test_health(self):
        async with client() as c:
            resp = await c.get("/health")
        assert resp.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_cors_headers(self):
        async with client() as c:
            resp = await c.options(
                "/health",
                headers={
                    "Origin": "http://localhost:3000",
                    "Access-Control-Request-Method": "GET",
                },
            )
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"
