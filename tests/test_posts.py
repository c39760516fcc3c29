"""Tests for post listing and cascading deletion."""

from bson import ObjectId
import pytest
from httpx import AsyncClient

from conftest import only_post_id, upload


@pytest.mark.asyncio
async def test_new_post_starts_with_zero_counters(async_client: AsyncClient):
    created = await upload(async_client, user_id="u1", caption="Sunset")

    response = await async_client.get("/api/posts/user/u1")
    assert response.status_code == 200
    posts = response.json()
    assert len(posts) == 1
    post = posts[0]
    assert post["photoId"] == created["photoId"]
    assert post["photoUrl"] == created["url"]
    assert post["caption"] == "Sunset"
    assert (post["likes"], post["comments"], post["shares"]) == (0, 0, 0)
    assert post["commentsList"] == []
    assert post["_id"] == post["id"]


@pytest.mark.asyncio
async def test_user_posts_are_newest_first_with_nested_comments(async_client: AsyncClient):
    await upload(async_client, caption="older")
    await upload(async_client, caption="newer")

    posts = (await async_client.get("/api/posts/user/u1")).json()
    assert [post["caption"] for post in posts] == ["newer", "older"]

    await async_client.post(
        f"/api/posts/{posts[1]['id']}/comments",
        json={"userId": "u2", "username": "Bea", "text": "Lovely"},
    )

    posts = (await async_client.get("/api/posts/user/u1")).json()
    assert posts[0]["commentsList"] == []
    assert posts[1]["comments"] == 1
    comment = posts[1]["commentsList"][0]
    assert comment["username"] == "Bea"
    assert comment["text"] == "Lovely"


@pytest.mark.asyncio
async def test_unknown_user_has_no_posts(async_client: AsyncClient):
    response = await async_client.get("/api/posts/user/nobody")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_delete_post_cascades_to_photo_and_comments_but_not_likes(async_client: AsyncClient, db):
    created = await upload(async_client, user_id="u1")
    post_id = await only_post_id(async_client)

    for text in ("one", "two"):
        await async_client.post(f"/api/posts/{post_id}/comments", json={"userId": "u2", "text": text})
    await async_client.post(f"/api/posts/{post_id}/like", json={"userId": "u2"})

    response = await async_client.request("DELETE", f"/api/posts/{post_id}", json={"userId": "u1"})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert await db["posts"].count_documents({}) == 0
    assert await db["photos"].count_documents({}) == 0
    assert await db["comments"].count_documents({"postId": post_id}) == 0
    # Likes on a deleted post are not cleaned up
    assert await db["likes"].count_documents({"postId": post_id}) == 1
    assert (await async_client.get(created["url"])).status_code == 404


@pytest.mark.asyncio
async def test_delete_post_requires_owner(async_client: AsyncClient, db):
    await upload(async_client, user_id="u1")
    post_id = await only_post_id(async_client)

    response = await async_client.request("DELETE", f"/api/posts/{post_id}", json={"userId": "intruder"})
    assert response.status_code == 404
    assert response.json() == {"error": "Post not found or unauthorized"}
    assert await db["posts"].count_documents({}) == 1
    assert await db["photos"].count_documents({}) == 1


@pytest.mark.asyncio
async def test_delete_post_validation(async_client: AsyncClient):
    malformed = await async_client.request("DELETE", "/api/posts/123", json={"userId": "u1"})
    assert malformed.status_code == 400
    assert malformed.json() == {"error": "Invalid post ID"}

    no_user = await async_client.request("DELETE", f"/api/posts/{ObjectId()}")
    assert no_user.status_code == 400
    assert no_user.json() == {"error": "User ID is required"}

    missing = await async_client.request("DELETE", f"/api/posts/{ObjectId()}", json={"userId": "u1"})
    assert missing.status_code == 404
