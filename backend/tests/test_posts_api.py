"""
Blog Backend — Index and Posts Endpoint Tests
==============================================

What:  End-to-end tests of /api/ and /api/posts/ through the ASGI app.
How:   Each test gets a fresh app on its own in-memory SQLite database
       (see conftest.test_app), so IDs start at 1 in every test.
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.routes import parse_resource_id
from blog.services.post_service import PostService


async def _create_category(client, title="Tech"):
    response = await client.post("/api/categories/", json={"title": title})
    assert response.status_code == 201


async def _create_post(client, title="Hi", body="World", category_id=1):
    response = await client.post(
        "/api/posts/", json={"title": title, "body": body, "category_id": category_id}
    )
    assert response.status_code == 201


class TestIndex:

    @pytest.mark.asyncio
    async def test_index_advertises_collections(self, test_client):
        response = await test_client.get("/api/")

        assert response.status_code == 200
        assert response.json() == {
            "posts": "http://test/api/posts/",
            "categories": "http://test/api/categories/",
        }

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, test_client):
        response = await test_client.get("/api/", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_missing_trailing_slash_redirects(self, test_client):
        response = await test_client.get("/api/posts")

        assert response.status_code == 307
        assert response.headers["location"].endswith("/api/posts/")

    @pytest.mark.asyncio
    async def test_unknown_route_returns_not_found_message(self, test_client):
        response = await test_client.get("/api/comments/")

        assert response.status_code == 404
        assert response.json() == {"message": "Not found"}


class TestPostsCollection:

    @pytest.mark.asyncio
    async def test_list_posts_empty_envelope(self, test_client):
        response = await test_client.get("/api/posts/")

        assert response.status_code == 200
        assert response.json() == {
            "uri": "http://test/api/posts/",
            "methods": ["GET", "POST", "PATCH", "DELETE"],
            "data": [],
        }

    @pytest.mark.asyncio
    async def test_list_posts_newest_first(self, test_client):
        await _create_category(test_client)
        await _create_post(test_client, title="First")
        await _create_post(test_client, title="Second")

        response = await test_client.get("/api/posts/")

        titles = [post["title"] for post in response.json()["data"]]
        assert titles == ["Second", "First"]

    @pytest.mark.asyncio
    async def test_create_post_returns_empty_201(self, test_client):
        await _create_category(test_client)

        response = await test_client.post(
            "/api/posts/", json={"title": "Hi", "body": "World", "category_id": 1}
        )

        assert response.status_code == 201
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_created_post_is_retrievable(self, test_client):
        await _create_category(test_client)
        await _create_post(test_client)

        response = await test_client.get("/api/posts/1/")

        assert response.status_code == 200
        post = response.json()
        assert list(post) == ["id", "title", "body", "category_id", "created_at"]
        assert post["id"] == 1
        assert post["title"] == "Hi"
        assert post["body"] == "World"
        assert post["category_id"] == 1
        assert post["created_at"]

    @pytest.mark.asyncio
    async def test_client_supplied_id_and_created_at_are_ignored(self, test_client):
        await _create_category(test_client)

        await test_client.post(
            "/api/posts/",
            json={
                "id": 50,
                "created_at": "1999-01-01T00:00:00",
                "title": "Hi",
                "body": "World",
                "category_id": 1,
            },
        )

        assert (await test_client.get("/api/posts/50/")).status_code == 404
        post = (await test_client.get("/api/posts/1/")).json()
        assert not post["created_at"].startswith("1999")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "", "body": "World", "category_id": 1},
            {"title": "Hi", "body": "", "category_id": 1},
            {"title": "Hi", "body": "World"},
            {"title": None, "body": "World", "category_id": 1},
            {},
        ],
    )
    async def test_create_post_missing_field(self, test_client, payload):
        await _create_category(test_client)

        response = await test_client.post("/api/posts/", json=payload)

        assert response.status_code == 422
        assert response.json() == {"message": "Unprocessable Entity"}
        assert (await test_client.get("/api/posts/")).json()["data"] == []

    @pytest.mark.asyncio
    async def test_create_post_unknown_category(self, test_client):
        response = await test_client.post(
            "/api/posts/", json={"title": "Hi", "body": "World", "category_id": 99}
        )

        assert response.status_code == 422
        assert response.json() == {"message": "Unprocessable Entity"}
        assert (await test_client.get("/api/posts/")).json()["data"] == []

    @pytest.mark.asyncio
    async def test_create_post_malformed_json(self, test_client):
        response = await test_client.post(
            "/api/posts/",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json() == {"message": "Unprocessable Entity"}


class TestPostItem:

    @pytest.mark.asyncio
    async def test_get_missing_post(self, test_client):
        response = await test_client.get("/api/posts/1/")

        assert response.status_code == 404
        assert response.json() == {"message": "Not found"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["abc", "1.5", "99999999999999999999"])
    async def test_get_non_integer_id_is_not_found(self, test_client, raw_id):
        response = await test_client.get(f"/api/posts/{raw_id}/")

        assert response.status_code == 404
        assert response.json() == {"message": "Not found"}

    @pytest.mark.asyncio
    async def test_patch_non_integer_id_still_204(self, test_client):
        await _create_category(test_client)
        await _create_post(test_client)

        response = await test_client.patch("/api/posts/abc/", json={"title": "X"})

        assert response.status_code == 204
        assert (await test_client.get("/api/posts/1/")).json()["title"] == "Hi"

    @pytest.mark.asyncio
    async def test_patch_non_integer_id_with_empty_body(self, test_client):
        response = await test_client.patch("/api/posts/abc/", json={})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_delete_non_integer_id_still_204(self, test_client):
        await _create_category(test_client)
        await _create_post(test_client)

        response = await test_client.delete("/api/posts/abc/")

        assert response.status_code == 204
        assert (await test_client.get("/api/posts/1/")).status_code == 200

    @pytest.mark.asyncio
    async def test_patch_title_only(self, test_client):
        await _create_category(test_client)
        await _create_post(test_client)

        response = await test_client.patch("/api/posts/1/", json={"title": "X"})

        assert response.status_code == 204
        assert response.content == b""
        post = (await test_client.get("/api/posts/1/")).json()
        assert post["title"] == "X"
        assert post["body"] == "World"
        assert post["category_id"] == 1

    @pytest.mark.asyncio
    async def test_patch_null_field_is_left_unchanged(self, test_client):
        await _create_category(test_client)
        await _create_post(test_client)

        response = await test_client.patch(
            "/api/posts/1/", json={"title": None, "body": "new", "category_id": None}
        )

        assert response.status_code == 204
        post = (await test_client.get("/api/posts/1/")).json()
        assert post["title"] == "Hi"
        assert post["body"] == "new"
        assert post["category_id"] == 1

    @pytest.mark.asyncio
    async def test_patch_moves_post_to_other_category(self, test_client):
        await _create_category(test_client, "Tech")
        await _create_category(test_client, "News")
        await _create_post(test_client)

        response = await test_client.patch("/api/posts/1/", json={"category_id": 2})

        assert response.status_code == 204
        assert (await test_client.get("/api/posts/1/")).json()["category_id"] == 2

    @pytest.mark.asyncio
    async def test_patch_empty_object(self, test_client):
        await _create_category(test_client)
        await _create_post(test_client)
        before = (await test_client.get("/api/posts/1/")).json()

        response = await test_client.patch("/api/posts/1/", json={})

        assert response.status_code == 422
        assert response.json() == {"message": "Unprocessable Entity"}
        assert (await test_client.get("/api/posts/1/")).json() == before

    @pytest.mark.asyncio
    async def test_patch_unknown_category_leaves_post_unchanged(self, test_client):
        await _create_category(test_client)
        await _create_post(test_client)

        response = await test_client.patch(
            "/api/posts/1/", json={"title": "X", "category_id": 99}
        )

        assert response.status_code == 422
        post = (await test_client.get("/api/posts/1/")).json()
        assert post["title"] == "Hi"
        assert post["category_id"] == 1

    @pytest.mark.asyncio
    async def test_patch_missing_post_still_204(self, test_client):
        response = await test_client.patch("/api/posts/42/", json={"title": "X"})

        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_delete_post(self, test_client):
        await _create_category(test_client)
        await _create_post(test_client)

        response = await test_client.delete("/api/posts/1/")

        assert response.status_code == 204
        assert response.content == b""
        assert (await test_client.get("/api/posts/1/")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_post_still_204(self, test_client):
        response = await test_client.delete("/api/posts/42/")

        assert response.status_code == 204


class TestStoreFailure:

    @pytest.mark.asyncio
    async def test_store_failure_is_internal_server_error(self, test_client):
        await _create_category(test_client)
        await _create_post(test_client)
        failing_execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))
        )

        with patch.object(AsyncSession, "execute", failing_execute):
            response = await test_client.get("/api/posts/")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}

        # The app keeps serving once the store recovers
        response = await test_client.get("/api/posts/1/")
        assert response.status_code == 200
        assert response.json()["title"] == "Hi"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal_server_error(self, test_app):
        transport = ASGITransport(app=test_app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            with patch.object(
                PostService, "list_posts", AsyncMock(side_effect=RuntimeError("boom"))
            ):
                response = await client.get("/api/posts/")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}


class TestParseResourceId:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1", 1),
            ("42", 42),
            ("-3", -3),
            ("abc", None),
            ("1.5", None),
            ("", None),
            (str(2 ** 63), None),
        ],
    )
    def test_parse_resource_id(self, raw, expected):
        assert parse_resource_id(raw) == expected
