from typing import Final

from bson import ObjectId
from fastapi import status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from vistagram.core.errors import APIError

PHOTOS_COLLECTION: Final[str] = "photos"
POSTS_COLLECTION: Final[str] = "posts"
COMMENTS_COLLECTION: Final[str] = "comments"
LIKES_COLLECTION: Final[str] = "likes"


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    await db[PHOTOS_COLLECTION].create_index(
        [("userId", ASCENDING), ("createdAt", DESCENDING)],
        name="photos_user_created_idx",
    )
    await db[POSTS_COLLECTION].create_index(
        [("userId", ASCENDING), ("createdAt", DESCENDING)],
        name="posts_user_created_idx",
    )
    await db[POSTS_COLLECTION].create_index(
        [("photoId", ASCENDING)],
        name="posts_photo_id_idx",
    )
    await db[COMMENTS_COLLECTION].create_index(
        [("postId", ASCENDING), ("createdAt", DESCENDING)],
        name="comments_post_created_idx",
    )
    # Not unique: one like per user per post is checked by the toggle handler
    await db[LIKES_COLLECTION].create_index(
        [("postId", ASCENDING), ("userId", ASCENDING)],
        name="likes_post_user_idx",
    )
    await db[LIKES_COLLECTION].create_index(
        [("userId", ASCENDING)],
        name="likes_user_idx",
    )


def parse_object_id(value: str, label: str) -> ObjectId:
    """Return ``value`` as an ObjectId or raise 400 ``Invalid <label> ID``."""
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise APIError(status.HTTP_400_BAD_REQUEST, f"Invalid {label} ID")
    return ObjectId(value)


def photo_url(photo_id) -> str:
    return f"/api/photos/{photo_id}"


__all__ = [
    "PHOTOS_COLLECTION",
    "POSTS_COLLECTION",
    "COMMENTS_COLLECTION",
    "LIKES_COLLECTION",
    "ensure_indexes",
    "parse_object_id",
    "photo_url",
]
