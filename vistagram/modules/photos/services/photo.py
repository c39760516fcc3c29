from typing import List, Optional
from datetime import datetime, timezone
import asyncio
import logging

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from vistagram.db.collections import PHOTOS_COLLECTION, POSTS_COLLECTION, photo_url
from vistagram.modules.photos.schemas.photo import UserPhoto

logger = logging.getLogger(__name__)

async def create_photo(
    db: AsyncIOMotorDatabase,
    *,
    user_id: str,
    filename: str,
    mimetype: str,
    data: bytes,
    caption: Optional[str] = None,
    location: Optional[str] = None,
) -> ObjectId:
    """Store the image bytes and metadata, returning the new photo ID"""
    now = datetime.now(timezone.utc)
    photo_doc = {
        "userId": user_id,
        "filename": filename,
        "originalName": filename,
        "mimetype": mimetype,
        "size": len(data),
        "data": data,
        "caption": caption or "",
        "location": location or "",
        "createdAt": now,
        "updatedAt": now,
    }
    result = await db[PHOTOS_COLLECTION].insert_one(photo_doc)
    logger.info(f"Stored photo {result.inserted_id} ({len(data)} bytes) for user {user_id}")
    return result.inserted_id

async def get_photo_binary(db: AsyncIOMotorDatabase, photo_id: ObjectId) -> Optional[dict]:
    """Get the payload, MIME type and filename of a photo"""
    return await db[PHOTOS_COLLECTION].find_one(
        {"_id": photo_id},
        projection={"data": 1, "mimetype": 1, "filename": 1},
    )

async def _with_post_reference(db: AsyncIOMotorDatabase, photo: dict) -> UserPhoto:
    # Posts keep the photo ID as a string
    post = await db[POSTS_COLLECTION].find_one(
        {"photoId": str(photo["_id"])},
        projection={"_id": 1, "likes": 1},
    )
    return UserPhoto(
        id=str(photo["_id"]),
        post_id=str(post["_id"]) if post else None,
        url=photo_url(photo["_id"]),
        caption=photo.get("caption", ""),
        location=photo.get("location", ""),
        created_at=photo["createdAt"],
        filename=photo.get("filename", ""),
        likes=post.get("likes", 0) if post else 0,
    )

async def get_user_photos(db: AsyncIOMotorDatabase, user_id: str) -> List[UserPhoto]:
    """Get a user's photos, newest first, with the post and like count for each"""
    cursor = db[PHOTOS_COLLECTION].find(
        {"userId": user_id},
        projection={"data": 0},
    ).sort([("createdAt", -1), ("_id", -1)])
    photos = await cursor.to_list(length=None)
    return list(await asyncio.gather(*(_with_post_reference(db, photo) for photo in photos)))

async def delete_photo(db: AsyncIOMotorDatabase, photo_id: ObjectId, user_id: str) -> bool:
    """
    Delete a photo owned by ``user_id``.

    Posts referencing the photo are left untouched.
    """
    result = await db[PHOTOS_COLLECTION].delete_one({"_id": photo_id, "userId": user_id})
    if result.deleted_count:
        logger.info(f"Deleted photo {photo_id} for user {user_id}")
    return result.deleted_count > 0
