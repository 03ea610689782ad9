"""
Pressroom Backend — Article Endpoint Tests
============================================

What:  Article CRUD over multipart/form-data, including the photo
       upload-then-associate flow and its file-system side effects.
How:   Assertions look at both the HTTP response and the storage directory,
       since a failed request must leave no file behind and a delete must
       remove the blob.
"""

import io
from pathlib import Path

import pytest
from fastapi import UploadFile

from pressroom.routes.articles import photo_upload


def _stored_files(storage_root: str) -> list:
    return [p for p in Path(storage_root).rglob("*") if p.is_file()]


def _photo_file(png_bytes, name="cover.png", media_type="image/png"):
    return {"photo": (name, png_bytes, media_type)}


class TestCreateArticle:

    @pytest.mark.asyncio
    async def test_create_without_photo(self, test_client, article_form, category, author):
        response = await test_client.post("/articles", data=article_form)

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "Hello"
        assert body["content"] == "First post"
        assert body["photo"] is None
        assert body["photo_id"] is None
        assert body["category"] == category
        assert body["author"]["id"] == author["id"]
        assert body["author"]["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_create_with_photo_stores_blob_and_links_it(
        self, test_client, article_form, png_bytes, blob_store
    ):
        response = await test_client.post(
            "/articles", data=article_form, files=_photo_file(png_bytes)
        )

        assert response.status_code == 201
        photo = response.json()["photo"]
        assert photo is not None
        assert photo["path"].startswith("images/articles/")
        assert photo["path"].endswith(".png")
        assert photo["name"] == photo["path"].rsplit("/", 1)[-1]
        assert photo["url"] == f"/files/{photo['path']}"
        assert response.json()["photo_id"] == photo["id"]

        assert blob_store.resolve(photo["path"]).read_bytes() == png_bytes

    @pytest.mark.asyncio
    async def test_uploaded_photo_is_listed_under_photos(
        self, test_client, article_form, png_bytes
    ):
        created = await test_client.post(
            "/articles", data=article_form, files=_photo_file(png_bytes)
        )
        photo = created.json()["photo"]

        listed = await test_client.get("/photos")
        shown = await test_client.get(f"/photos/{photo['id']}")

        assert [p["id"] for p in listed.json()] == [photo["id"]]
        assert shown.status_code == 200
        assert shown.json() == photo

    @pytest.mark.asyncio
    async def test_extension_is_normalized_to_lowercase(
        self, test_client, article_form, jpeg_bytes
    ):
        response = await test_client.post(
            "/articles",
            data=article_form,
            files=_photo_file(jpeg_bytes, name="Holiday.JPG", media_type="image/jpeg"),
        )

        assert response.status_code == 201
        assert response.json()["photo"]["name"].endswith(".jpg")

    @pytest.mark.asyncio
    async def test_unknown_category_is_400_and_writes_nothing(
        self, test_client, article_form, png_bytes, temp_storage
    ):
        article_form["category_id"] = "999"

        response = await test_client.post(
            "/articles", data=article_form, files=_photo_file(png_bytes)
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "category_id"
        assert _stored_files(temp_storage) == []
        assert (await test_client.get("/articles")).json() == []
        assert (await test_client.get("/photos")).json() == []

    @pytest.mark.asyncio
    async def test_unknown_author_is_400(self, test_client, article_form):
        article_form["author_id"] = "999"

        response = await test_client.post("/articles", data=article_form)

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "author_id"

    @pytest.mark.asyncio
    async def test_unsupported_extension_is_400(
        self, test_client, article_form, temp_storage
    ):
        response = await test_client.post(
            "/articles",
            data=article_form,
            files={"photo": ("notes.txt", b"plain text", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "photo"
        assert _stored_files(temp_storage) == []

    @pytest.mark.asyncio
    async def test_empty_file_part_counts_as_no_photo(self, test_client, article_form, temp_storage):
        response = await test_client.post(
            "/articles",
            data=article_form,
            files={"photo": ("", b"", "application/octet-stream")},
        )

        assert response.status_code == 201
        assert response.json()["photo"] is None
        assert _stored_files(temp_storage) == []

    @pytest.mark.asyncio
    async def test_missing_title_is_400(self, test_client, article_form):
        del article_form["title"]

        response = await test_client.post("/articles", data=article_form)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_non_integer_category_id_is_400(self, test_client, article_form):
        article_form["category_id"] = "tech"
        response = await test_client.post("/articles", data=article_form)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_blank_title_is_400(self, test_client, article_form):
        article_form["title"] = "   "
        response = await test_client.post("/articles", data=article_form)
        assert response.status_code == 400


class TestReadArticles:

    @pytest.mark.asyncio
    async def test_list_includes_nested_relations(
        self, test_client, article_form, png_bytes
    ):
        await test_client.post("/articles", data=article_form, files=_photo_file(png_bytes))
        await test_client.post("/articles", data={**article_form, "title": "Second"})

        response = await test_client.get("/articles")

        assert response.status_code == 200
        articles = response.json()
        assert [a["title"] for a in articles] == ["Hello", "Second"]
        assert articles[0]["photo"] is not None
        assert articles[1]["photo"] is None
        for article in articles:
            assert article["category"]["name"] == "Tech"
            assert article["author"]["name"] == "Ada Lovelace"

    @pytest.mark.asyncio
    async def test_show_unknown_is_404(self, test_client):
        response = await test_client.get("/articles/42")
        assert response.status_code == 404
        assert "42" in response.json()["message"]


class TestUpdateArticle:

    @pytest.mark.asyncio
    async def test_update_replaces_fields_and_keeps_photo(
        self, test_client, article_form, png_bytes, blob_store
    ):
        created = (
            await test_client.post("/articles", data=article_form, files=_photo_file(png_bytes))
        ).json()

        response = await test_client.put(
            f"/articles/{created['id']}",
            data={**article_form, "title": "Hello again", "content": "Edited"},
        )

        assert response.status_code == 202
        body = response.json()
        assert body["title"] == "Hello again"
        assert body["content"] == "Edited"
        assert body["photo"] == created["photo"]
        assert blob_store.resolve(created["photo"]["path"]).exists()

    @pytest.mark.asyncio
    async def test_update_moves_article_to_another_category(self, test_client, article_form):
        created = (await test_client.post("/articles", data=article_form)).json()
        other = (await test_client.post("/categories", json={"name": "Science"})).json()

        response = await test_client.put(
            f"/articles/{created['id']}",
            data={**article_form, "category_id": str(other["id"])},
        )

        assert response.status_code == 202
        assert response.json()["category"] == other

    @pytest.mark.asyncio
    async def test_update_with_new_photo_replaces_old_one(
        self, test_client, article_form, png_bytes, jpeg_bytes, blob_store, temp_storage
    ):
        created = (
            await test_client.post("/articles", data=article_form, files=_photo_file(png_bytes))
        ).json()
        old_photo = created["photo"]

        response = await test_client.put(
            f"/articles/{created['id']}",
            data=article_form,
            files=_photo_file(jpeg_bytes, name="new.jpg", media_type="image/jpeg"),
        )

        assert response.status_code == 202
        new_photo = response.json()["photo"]
        assert new_photo["id"] != old_photo["id"]
        assert new_photo["path"].endswith(".jpg")
        assert blob_store.resolve(new_photo["path"]).read_bytes() == jpeg_bytes
        assert not blob_store.resolve(old_photo["path"]).exists()
        assert (await test_client.get(f"/photos/{old_photo['id']}")).status_code == 404
        assert len(_stored_files(temp_storage)) == 1

    @pytest.mark.asyncio
    async def test_update_missing_field_is_400_and_changes_nothing(
        self, test_client, article_form
    ):
        created = (await test_client.post("/articles", data=article_form)).json()
        partial = {k: v for k, v in article_form.items() if k != "content"}
        partial["title"] = "Changed"

        response = await test_client.put(f"/articles/{created['id']}", data=partial)

        assert response.status_code == 400
        shown = (await test_client.get(f"/articles/{created['id']}")).json()
        assert shown["title"] == "Hello"

    @pytest.mark.asyncio
    async def test_update_unknown_article_is_404(self, test_client, article_form):
        response = await test_client.put("/articles/999", data=article_form)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_with_bad_photo_keeps_old_photo(
        self, test_client, article_form, png_bytes, blob_store
    ):
        created = (
            await test_client.post("/articles", data=article_form, files=_photo_file(png_bytes))
        ).json()

        response = await test_client.put(
            f"/articles/{created['id']}",
            data=article_form,
            files={"photo": ("script.exe", b"MZ", "application/octet-stream")},
        )

        assert response.status_code == 400
        shown = (await test_client.get(f"/articles/{created['id']}")).json()
        assert shown["photo"] == created["photo"]
        assert blob_store.resolve(created["photo"]["path"]).exists()


class TestDestroyArticle:

    @pytest.mark.asyncio
    async def test_destroy_removes_article_photo_and_blob(
        self, test_client, article_form, png_bytes, blob_store, temp_storage
    ):
        created = (
            await test_client.post("/articles", data=article_form, files=_photo_file(png_bytes))
        ).json()
        photo = created["photo"]

        response = await test_client.delete(f"/articles/{created['id']}")

        assert response.status_code == 204
        assert (await test_client.get(f"/articles/{created['id']}")).status_code == 404
        assert (await test_client.get(f"/photos/{photo['id']}")).status_code == 404
        assert not blob_store.resolve(photo["path"]).exists()
        assert _stored_files(temp_storage) == []

    @pytest.mark.asyncio
    async def test_destroy_keeps_category_and_author(self, test_client, article_form):
        created = (await test_client.post("/articles", data=article_form)).json()

        await test_client.delete(f"/articles/{created['id']}")

        assert (await test_client.get(f"/categories/{article_form['category_id']}")).status_code == 200
        assert (await test_client.get(f"/authors/{article_form['author_id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_destroy_tolerates_missing_blob(
        self, test_client, article_form, png_bytes, blob_store
    ):
        created = (
            await test_client.post("/articles", data=article_form, files=_photo_file(png_bytes))
        ).json()
        blob_store.resolve(created["photo"]["path"]).unlink()

        response = await test_client.delete(f"/articles/{created['id']}")

        assert response.status_code == 204
        assert (await test_client.get(f"/photos/{created['photo']['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_destroy_twice_is_404_the_second_time(self, test_client, article_form):
        created = (await test_client.post("/articles", data=article_form)).json()

        assert (await test_client.delete(f"/articles/{created['id']}")).status_code == 204
        assert (await test_client.delete(f"/articles/{created['id']}")).status_code == 404


class TestPhotoUploadField:

    @pytest.mark.asyncio
    async def test_unnamed_empty_part_is_no_upload(self):
        assert await photo_upload(UploadFile(file=io.BytesIO(b""), filename="")) is None

    @pytest.mark.asyncio
    async def test_named_empty_file_is_still_an_upload(self):
        upload = await photo_upload(UploadFile(file=io.BytesIO(b""), filename="cover.png"))

        assert upload is not None
        assert upload.content == b""

    @pytest.mark.asyncio
    async def test_reads_content(self, png_bytes):
        upload = await photo_upload(UploadFile(file=io.BytesIO(png_bytes), filename="cover.png"))

        assert upload.filename == "cover.png"
        assert upload.content == png_bytes
