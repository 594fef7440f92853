"""
API tests for the tile and feedback endpoints.
"""

import base64

import pytest
from fastapi import status
from httpx import AsyncClient

from tests.factories import TileFactory, TilePayloadFactory, persist


class TestTileController:
    """Test cases for Tile API endpoints."""

    @pytest.mark.asyncio
    async def test_create_tile(self, client: AsyncClient):
        response = await client.post("/api/tiles", json=TilePayloadFactory(tags=["b", "a"]))

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["type"] == "news"
        assert data["content"]["headline"] == "Launch day"
        assert data["tags"] == ["b", "a"]
        assert data["reactions"] == []
        assert data["pinned"] is False

    @pytest.mark.asyncio
    async def test_create_tile_with_id_twice(self, client: AsyncClient):
        payload = TilePayloadFactory(id="weather-today")

        first = await client.post("/api/tiles", json=payload)
        second = await client.post("/api/tiles", json=payload)

        assert first.json()["data"]["id"] == "weather-today"
        assert second.status_code == status.HTTP_409_CONFLICT
        assert second.json()["error_code"] == "DUPLICATE_TILE"

    @pytest.mark.asyncio
    async def test_create_tile_requires_type_and_content(self, client: AsyncClient):
        response = await client.post("/api/tiles", json={"content": {}})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_create_tile_null_content(self, client: AsyncClient):
        response = await client.post("/api/tiles", json={"type": "note", "content": None})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert (await client.get("/api/tiles", params={"mode": "all"})).json()["data"] == []

    @pytest.mark.asyncio
    async def test_list_modes(self, client: AsyncClient, test_db):
        plain, saved, archived = await persist(
            test_db,
            TileFactory.build(),
            TileFactory.build(saved_for_later=True),
            TileFactory.build(archived=True),
        )

        new = await client.get("/api/tiles")
        saved_only = await client.get("/api/tiles", params={"mode": "saved"})
        everything = await client.get("/api/tiles", params={"mode": "all"})
        legacy = await client.get("/api/tiles", params={"archived": "true"})

        assert [t["id"] for t in new.json()["data"]] == [plain.id]
        assert [t["id"] for t in saved_only.json()["data"]] == [saved.id]
        assert {t["id"] for t in everything.json()["data"]} == {plain.id, saved.id, archived.id}
        assert len(legacy.json()["data"]) == 3

    @pytest.mark.asyncio
    async def test_list_invalid_mode(self, client: AsyncClient):
        response = await client.get("/api/tiles", params={"mode": "later"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_list_by_type_and_search(self, client: AsyncClient, test_tile, test_db):
        await persist(test_db, TileFactory.build(type="weather", content={"temp": 20}))

        by_type = await client.get("/api/tiles", params={"type": "weather"})
        by_search = await client.get("/api/tiles", params={"search": "rust"})

        assert [t["type"] for t in by_type.json()["data"]] == ["weather"]
        assert [t["id"] for t in by_search.json()["data"]] == [test_tile.id]

    @pytest.mark.asyncio
    async def test_get_tile(self, client: AsyncClient, test_tile):
        response = await client.get(f"/api/tiles/{test_tile.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["source"] == "agent"

    @pytest.mark.asyncio
    async def test_get_missing_tile(self, client: AsyncClient):
        response = await client.get("/api/tiles/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "TILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_patch_flags(self, client: AsyncClient, test_tile):
        response = await client.patch(
            f"/api/tiles/{test_tile.id}",
            json={"read": True, "pinned": True, "savedForLater": True, "reactions": ["❤️"]},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["read"] is True
        assert data["pinned"] is True
        assert data["saved_for_later"] is True
        assert data["reactions"] == ["❤️"]
        assert data["starred"] is False

    @pytest.mark.asyncio
    async def test_saved_tile_leaves_new_mode(self, client: AsyncClient, test_tile):
        await client.patch(f"/api/tiles/{test_tile.id}", json={"savedForLater": True})

        new = await client.get("/api/tiles")
        saved = await client.get("/api/tiles", params={"mode": "saved"})

        assert new.json()["data"] == []
        assert [t["id"] for t in saved.json()["data"]] == [test_tile.id]

    @pytest.mark.asyncio
    async def test_delete_tile(self, client: AsyncClient, test_tile):
        response = await client.delete(f"/api/tiles/{test_tile.id}")

        assert response.status_code == status.HTTP_200_OK
        assert (await client.get(f"/api/tiles/{test_tile.id}")).status_code == 404


class TestFeedbackController:
    @pytest.mark.asyncio
    async def test_feedback_creates_tile(self, client: AsyncClient, test_settings):
        png = base64.b64encode(b"\x89PNG fake").decode()

        response = await client.post(
            "/api/feedback",
            json={"text": "Layout broke", "screenshot": png, "url": "/tiles", "userAgent": "Safari"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        tile_id = response.json()["data"]["id"]
        tile = (await client.get(f"/api/tiles/{tile_id}")).json()["data"]
        assert tile["type"] == "feedback"
        assert tile["tags"] == ["feedback"]
        assert tile["content"]["userAgent"] == "Safari"
        assert tile["content"]["screenshot"].startswith(str(test_settings.screenshots_dir))
        assert len(list(test_settings.screenshots_dir.glob("feedback-*.png"))) == 1

    @pytest.mark.asyncio
    async def test_feedback_requires_text(self, client: AsyncClient):
        response = await client.post("/api/feedback", json={"url": "/"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_feedback_bad_screenshot(self, client: AsyncClient):
        response = await client.post("/api/feedback", json={"text": "x", "screenshot": "%%%"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["details"] == {"field": "screenshot"}
