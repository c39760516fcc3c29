"""Tests for like toggling, like checks and liked posts."""

from datetime import datetime, timezone

from bson import ObjectId
import pytest
from httpx import AsyncClient

from vistagram.db.collections import ensure_indexes
from vistagram.modules.posts.services.counters import adjust_like_count
from conftest import only_post_id, upload


@pytest.mark.asyncio
async def test_toggle_like_twice_restores_state(async_client: AsyncClient, db):
    await upload(async_client)
    post_id = await only_post_id(async_client)

    liked = await async_client.post(f"/api/posts/{post_id}/like", json={"userId": "u2"})
    assert liked.status_code == 200
    assert liked.json() == {"success": True, "liked": True, "likes": 1}

    unliked = await async_client.post(f"/api/posts/{post_id}/like", json={"userId": "u2"})
    assert unliked.json() == {"success": True, "liked": False, "likes": 0}
    assert await db["likes"].count_documents({}) == 0


@pytest.mark.asyncio
async def test_likes_from_different_users_add_up(async_client: AsyncClient):
    await upload(async_client)
    post_id = await only_post_id(async_client)

    for user_id in ("u2", "u3", "u4"):
        await async_client.post(f"/api/posts/{post_id}/like", json={"userId": user_id})

    posts = (await async_client.get("/api/posts/user/u1")).json()
    assert posts[0]["likes"] == 3


@pytest.mark.asyncio
async def test_check_like_reports_state_without_toggling(async_client: AsyncClient, db):
    await upload(async_client)
    post_id = await only_post_id(async_client)

    before = await async_client.post(f"/api/posts/{post_id}/like/check", json={"userId": "u2"})
    assert before.json() == {"liked": False}

    await async_client.post(f"/api/posts/{post_id}/like", json={"userId": "u2"})

    after = await async_client.post(f"/api/posts/{post_id}/like/check", json={"userId": "u2"})
    assert after.json() == {"liked": True}
    other_user = await async_client.post(f"/api/posts/{post_id}/like/check", json={"userId": "u3"})
    assert other_user.json() == {"liked": False}
    assert await db["likes"].count_documents({}) == 1


@pytest.mark.asyncio
async def test_like_validation(async_client: AsyncClient):
    malformed = await async_client.post("/api/posts/nope/like", json={"userId": "u2"})
    assert malformed.status_code == 400
    assert malformed.json() == {"error": "Invalid post ID"}

    no_user = await async_client.post(f"/api/posts/{ObjectId()}/like", json={})
    assert no_user.status_code == 400
    assert no_user.json() == {"error": "User ID is required"}

    missing = await async_client.post(f"/api/posts/{ObjectId()}/like", json={"userId": "u2"})
    assert missing.status_code == 404

    check_no_user = await async_client.post(f"/api/posts/{ObjectId()}/like/check")
    assert check_no_user.status_code == 400


@pytest.mark.asyncio
async def test_like_counter_never_goes_negative(db):
    result = await db["posts"].insert_one({"userId": "u1", "likes": 0, "comments": 0, "shares": 0})

    assert await adjust_like_count(db, result.inserted_id, -1) is False
    post = await db["posts"].find_one({"_id": result.inserted_id})
    assert post["likes"] == 0


@pytest.mark.asyncio
async def test_like_index_does_not_enforce_uniqueness(db):
    await ensure_indexes(db)
    like = {"postId": str(ObjectId()), "userId": "u2", "createdAt": datetime.now(timezone.utc)}

    await db["likes"].insert_one(dict(like))
    await db["likes"].insert_one(dict(like))
    assert await db["likes"].count_documents({"userId": "u2"}) == 2


@pytest.mark.asyncio
async def test_liked_posts_lists_posts_with_comments(async_client: AsyncClient):
    await upload(async_client, user_id="u1", caption="mine")
    await upload(async_client, user_id="u3", caption="theirs")
    first_id = await only_post_id(async_client, "u1")
    second_id = await only_post_id(async_client, "u3")

    await async_client.post(f"/api/posts/{first_id}/comments", json={"userId": "u2", "text": "wow"})
    await async_client.post(f"/api/posts/{first_id}/like", json={"userId": "u2"})
    await async_client.post(f"/api/posts/{second_id}/like", json={"userId": "u2"})

    response = await async_client.get("/api/users/u2/liked-posts")
    assert response.status_code == 200
    posts = response.json()
    assert [post["caption"] for post in posts] == ["theirs", "mine"]
    assert posts[1]["likes"] == 1
    assert posts[1]["commentsList"][0]["text"] == "wow"
    assert [post["_id"] for post in posts] == [second_id, first_id]


@pytest.mark.asyncio
async def test_liked_posts_skip_deleted_posts(async_client: AsyncClient):
    await upload(async_client, user_id="u1")
    post_id = await only_post_id(async_client)
    await async_client.post(f"/api/posts/{post_id}/like", json={"userId": "u2"})
    await async_client.request("DELETE", f"/api/posts/{post_id}", json={"userId": "u1"})

    response = await async_client.get("/api/users/u2/liked-posts")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_liked_posts_order_follows_posts_not_likes(async_client: AsyncClient):
    await upload(async_client, user_id="u1", caption="older")
    await upload(async_client, user_id="u3", caption="newer")
    older_id = await only_post_id(async_client, "u1")
    newer_id = await only_post_id(async_client, "u3")

    await async_client.post(f"/api/posts/{newer_id}/like", json={"userId": "u2"})
    await async_client.post(f"/api/posts/{older_id}/like", json={"userId": "u2"})

    posts = (await async_client.get("/api/users/u2/liked-posts")).json()
    assert [post["id"] for post in posts] == [newer_id, older_id]
