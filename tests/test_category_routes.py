"""
Pressroom Backend — Category Endpoint Tests
=============================================

What:  The generic CRUD pattern exercised end-to-end on the simplest resource.
How:   HTTPX client against a fresh app and SQLite database per test.
"""

import pytest


class TestCategoryLifecycle:
    """present/absent transitions for a category."""

    @pytest.mark.asyncio
    async def test_create_show_delete_scenario(self, test_client):
        """POST → 201, GET → 200, DELETE → 204, GET → 404."""
        created = await test_client.post("/categories", json={"name": "Tech"})
        assert created.status_code == 201
        assert created.json() == {"id": 1, "name": "Tech"}

        shown = await test_client.get("/categories/1")
        assert shown.status_code == 200
        assert shown.json() == {"id": 1, "name": "Tech"}

        deleted = await test_client.delete("/categories/1")
        assert deleted.status_code == 204
        assert deleted.content == b""

        gone = await test_client.get("/categories/1")
        assert gone.status_code == 404
        assert gone.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_list_returns_all_in_id_order(self, test_client):
        for name in ("Tech", "Science", "Arts"):
            await test_client.post("/categories", json={"name": name})

        response = await test_client.get("/categories")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Tech", "Science", "Arts"]

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/categories")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_update_replaces_name(self, test_client, category):
        response = await test_client.put(
            f"/categories/{category['id']}", json={"name": "Technology"}
        )

        assert response.status_code == 202
        assert response.json() == {"id": category["id"], "name": "Technology"}
        shown = await test_client.get(f"/categories/{category['id']}")
        assert shown.json()["name"] == "Technology"


class TestCategoryErrors:

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found_for_show_update_destroy(self, test_client):
        assert (await test_client.get("/categories/999")).status_code == 404
        assert (await test_client.put("/categories/999", json={"name": "X"})).status_code == 404
        assert (await test_client.delete("/categories/999")).status_code == 404

    @pytest.mark.asyncio
    async def test_destroy_twice_is_not_found_twice(self, test_client, category):
        assert (await test_client.delete(f"/categories/{category['id']}")).status_code == 204
        assert (await test_client.delete(f"/categories/{category['id']}")).status_code == 404
        assert (await test_client.delete(f"/categories/{category['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_create_with_missing_name_is_400(self, test_client):
        response = await test_client.post("/categories", json={})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["errors"][0]["loc"][-1] == "name"

    @pytest.mark.asyncio
    async def test_create_with_blank_name_is_400(self, test_client):
        response = await test_client.post("/categories", json={"name": "   "})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_failed_create_writes_nothing(self, test_client):
        await test_client.post("/categories", json={"name": ""})
        assert (await test_client.get("/categories")).json() == []

    @pytest.mark.asyncio
    async def test_non_integer_id_is_400(self, test_client):
        response = await test_client.get("/categories/abc")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_without_name_is_400(self, test_client, category):
        response = await test_client.put(f"/categories/{category['id']}", json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_destroy_category_in_use_is_conflict(self, test_client, article_form):
        created = await test_client.post("/articles", data=article_form)
        assert created.status_code == 201

        response = await test_client.delete(f"/categories/{article_form['category_id']}")

        assert response.status_code == 409
        assert response.json()["details"]["article_count"] == 1
        still_there = await test_client.get(f"/categories/{article_form['category_id']}")
        assert still_there.status_code == 200
