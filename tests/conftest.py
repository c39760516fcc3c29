"""Shared fixtures: an in-memory Mongo database wired into the app."""

from typing import Any, Dict
from uuid import uuid4

import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient

from vistagram.db.session import get_db
from vistagram.main import app

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00fake-jpeg-payload\xff\xd9"


@pytest.fixture
def db():
    return AsyncMongoMockClient()[f"vistagram_test_{uuid4().hex[:8]}"]


@pytest.fixture
async def async_client(db):
    app.dependency_overrides[get_db] = lambda: db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def unready_client():
    """Client against the app without a database override."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


async def upload(
    client: httpx.AsyncClient,
    user_id: str = "u1",
    caption: str = "Sunset",
    location: str = "Santorini",
    content: bytes = JPEG_BYTES,
    filename: str = "sunset.jpg",
    content_type: str = "image/jpeg",
) -> Dict[str, Any]:
    response = await client.post(
        "/api/photos/upload",
        data={"userId": user_id, "caption": caption, "location": location},
        files={"photo": (filename, content, content_type)},
    )
    assert response.status_code == 200, response.text
    return response.json()


async def only_post_id(client: httpx.AsyncClient, user_id: str = "u1") -> str:
    posts = (await client.get(f"/api/posts/user/{user_id}")).json()
    assert len(posts) == 1
    return posts[0]["id"]
