"""
HeroDex Backend — HTTP API Tests
==================================

What:  End-to-end request/response behavior through the FastAPI app.
How:   HTTPX AsyncClient over ASGITransport, database = in-memory SQLite.

What we test:
    ✅ JSON shapes and camelCase keys of every route
    ✅ Filters from body (POST searches) vs query string (GET /search)
    ✅ Comment create → list round trip, 404 for unknown heroes
    ✅ Catch-all 404 and 500 bodies, 400/422 validation, 413 body limit
    ✅ Out-of-range pages and stat bounds give empty results, not 500s
"""

import logging
import uuid

import pytest
from httpx import AsyncClient, ASGITransport

from herodex.main import create_app
from herodex.services.hero_service import hero_service


def names(body):
    return [hero["name"] for hero in body["data"]]


class TestHeroRoutes:

    @pytest.mark.asyncio
    async def test_list_shape(self, test_client, heroes):
        response = await test_client.get("/heroes")

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"data", "count", "pagination"}
        assert body["count"] == len(heroes)
        assert body["pagination"] == {
            "page": 1,
            "pageCount": 1,
            "previousPage": 1,
            "nextPage": 2,
        }
        hero = body["data"][0]
        assert hero["name"] == "Batman"
        assert set(hero["powerstats"]) == {
            "intelligence", "strength", "speed", "durability", "power", "combat",
        }
        assert set(hero["appearance"]) == {"gender", "race", "eyeColor", "hairColor"}
        assert "imageUrl" in hero

    @pytest.mark.asyncio
    async def test_list_second_page(self, test_client, many_heroes):
        response = await test_client.get("/heroes", params={"page": "2"})

        body = response.json()
        assert len(body["data"]) == 10
        assert body["data"][0]["name"] == "Hero 11"
        assert body["pagination"] == {
            "page": 2,
            "pageCount": 3,
            "previousPage": 1,
            "nextPage": 3,
        }

    @pytest.mark.asyncio
    async def test_list_non_numeric_page(self, test_client, many_heroes):
        response = await test_client.get("/heroes", params={"page": "abc"})

        assert response.status_code == 200
        assert response.json()["pagination"]["page"] == 1

    @pytest.mark.asyncio
    async def test_list_huge_page_is_empty(self, test_client, heroes):
        response = await test_client.get("/heroes", params={"page": "99999999999999999999"})

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["count"] == len(heroes)
        assert body["pagination"]["page"] == 99999999999999999999

    @pytest.mark.asyncio
    async def test_get_hero(self, test_client, heroes):
        hero = heroes["Superman"]
        response = await test_client.get(f"/heroes/{hero.id}")

        assert response.status_code == 200
        results = response.json()["results"]
        assert len(results) == 1
        assert results[0]["id"] == str(hero.id)
        assert results[0]["powerstats"]["strength"] == 100

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hero_id", [str(uuid.uuid4()), "missing"])
    async def test_get_unknown_hero_is_empty_not_404(self, test_client, heroes, hero_id):
        response = await test_client.get(f"/heroes/{hero_id}")

        assert response.status_code == 200
        assert response.json() == {"results": []}


class TestSearchRoutes:

    @pytest.mark.asyncio
    async def test_by_name_from_body(self, test_client, heroes):
        response = await test_client.post("/search/heroes/by-name", json={"query": "FLA"})

        assert response.status_code == 200
        body = response.json()
        assert names(body) == ["Flash", "flamebird"]
        assert body["count"] == 2

    @pytest.mark.asyncio
    async def test_by_name_page_from_query_string(self, test_client, many_heroes):
        response = await test_client.post(
            "/search/heroes/by-name", params={"page": 3}, json={"query": "hero"}
        )

        body = response.json()
        assert names(body) == [f"Hero {i:02d}" for i in range(21, 26)]
        assert body["pagination"]["page"] == 3

    @pytest.mark.asyncio
    async def test_by_name_without_body_matches_all(self, test_client, heroes):
        response = await test_client.post("/search/heroes/by-name")

        assert response.status_code == 200
        assert response.json()["count"] == len(heroes)

    @pytest.mark.asyncio
    async def test_by_min_stats(self, test_client, heroes):
        response = await test_client.post(
            "/search/heroes/by-min-stats", json={"speed": 100, "intelligence": 90}
        )

        assert response.status_code == 200
        assert names(response.json()) == ["Superman"]

    @pytest.mark.asyncio
    async def test_by_min_stats_empty_body_matches_all(self, test_client, heroes):
        response = await test_client.post("/search/heroes/by-min-stats", json={})
        assert response.json()["count"] == len(heroes)

    @pytest.mark.asyncio
    async def test_by_min_stats_unknown_key_is_422(self, test_client, heroes):
        response = await test_client.post("/search/heroes/by-min-stats", json={"luck": 5})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_combined_query_string(self, test_client, heroes):
        response = await test_client.get(
            "/search",
            params={"name": "w", "gender": "Female", "combat": "100"},
        )

        assert response.status_code == 200
        assert names(response.json()) == ["Wonder Woman"]

    @pytest.mark.asyncio
    async def test_combined_blank_form_fields_ignored(self, test_client, heroes):
        response = await test_client.get(
            "/search?name=&gender=Male&intelligence=&strength=&speed=100"
            "&durability=&power=&combat="
        )

        assert response.status_code == 200
        assert names(response.json()) == ["Flash", "Quicksilver", "Superman"]

    @pytest.mark.asyncio
    async def test_combined_non_integer_stat_is_400(self, test_client, heroes):
        response = await test_client.get("/search", params={"speed": "fast"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "speed"

    @pytest.mark.asyncio
    async def test_combined_huge_threshold_matches_nothing(self, test_client, heroes):
        response = await test_client.get("/search", params={"speed": "9" * 30})

        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["count"] == 0

    @pytest.mark.asyncio
    async def test_by_min_stats_huge_threshold_matches_nothing(self, test_client, heroes):
        response = await test_client.post(
            "/search/heroes/by-min-stats", json={"combat": 10**30}
        )

        assert response.status_code == 200
        assert response.json()["count"] == 0


class TestCommentRoutes:

    @pytest.mark.asyncio
    async def test_create_then_list(self, test_client, heroes):
        hero = heroes["Black Widow"]

        created = await test_client.post(
            f"/heroes/{hero.id}/comments", json={"text": "Red in my ledger"}
        )
        assert created.status_code == 201
        created_body = created.json()
        assert created_body["msg"] == "success!"
        assert created_body["comment"]["text"] == "Red in my ledger"
        assert created_body["comment"]["hero"]["id"] == str(hero.id)
        assert "createdAt" in created_body["comment"]

        listed = await test_client.get(f"/heroes/{hero.id}/comments", params={"page": 1})
        assert listed.status_code == 200
        body = listed.json()
        assert body["count"] == 1
        assert body["data"][0]["text"] == "Red in my ledger"
        assert body["data"][0]["hero"]["name"] == "Black Widow"
        assert body["pagination"]["pageCount"] == 1

    @pytest.mark.asyncio
    async def test_list_newest_first(self, test_client, heroes):
        hero_id = heroes["Flash"].id
        await test_client.post(f"/heroes/{hero_id}/comments", json={"text": "A"})
        await test_client.post(f"/heroes/{hero_id}/comments", json={"text": "B"})

        response = await test_client.get(f"/heroes/{hero_id}/comments")

        assert [c["text"] for c in response.json()["data"]] == ["B", "A"]

    @pytest.mark.asyncio
    async def test_list_huge_page_is_empty(self, test_client, heroes):
        hero_id = heroes["Batman"].id
        await test_client.post(f"/heroes/{hero_id}/comments", json={"text": "A"})

        response = await test_client.get(
            f"/heroes/{hero_id}/comments", params={"page": "99999999999999999999"}
        )

        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_create_for_unknown_hero_is_404(self, test_client, heroes):
        response = await test_client.post(
            f"/heroes/{uuid.uuid4()}/comments", json={"text": "orphan"}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_create_without_text_is_422(self, test_client, heroes):
        response = await test_client.post(f"/heroes/{heroes['Flash'].id}/comments", json={})
        assert response.status_code == 422


class TestFallbacks:

    @pytest.mark.asyncio
    async def test_welcome(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json() == {"msg": "Welcome To Our API!"}

    @pytest.mark.asyncio
    async def test_unmatched_route(self, test_client):
        response = await test_client.get("/villains")

        assert response.status_code == 404
        assert response.json() == {"err": "not found!"}

    @pytest.mark.asyncio
    async def test_store_failure_hits_fallback(self, test_client, monkeypatch):
        async def broken(*args, **kwargs):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(hero_service, "list_heroes", broken)

        response = await test_client.get("/heroes")

        assert response.status_code == 500
        assert response.json() == {"err": "Something broke!"}

    @pytest.mark.asyncio
    async def test_fallback_log_carries_request_id(self, test_client, monkeypatch, caplog):
        async def broken(*args, **kwargs):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(hero_service, "list_heroes", broken)

        with caplog.at_level(logging.ERROR, logger="herodex.main"):
            response = await test_client.get("/heroes", headers={"X-Request-ID": "req-500"})

        assert response.status_code == 500
        assert "[req-500] Unexpected error on GET /heroes" in caplog.text

    @pytest.mark.asyncio
    async def test_custom_fallback_handler(self, app, monkeypatch):
        from fastapi.responses import JSONResponse

        seen = []

        async def fallback(request, exc):
            seen.append(exc)
            return JSONResponse(status_code=500, content={"err": "custom"})

        async def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(hero_service, "list_heroes", broken)

        custom_app = create_app(fallback_handler=fallback)
        custom_app.dependency_overrides = app.dependency_overrides
        transport = ASGITransport(app=custom_app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/heroes")

        assert response.json() == {"err": "custom"}
        assert isinstance(seen[0], RuntimeError)

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_oversized_body_rejected(self, app):
        small_app = create_app(max_body_size=64)
        small_app.dependency_overrides = app.dependency_overrides
        transport = ASGITransport(app=small_app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/search/heroes/by-name", json={"query": "x" * 200}
            )

        assert response.status_code == 413
        assert response.json()["error"] == "payload_too_large"

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body
