from typing import Iterable, List, Optional
from datetime import datetime, timezone
import asyncio
import logging

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from vistagram.db.collections import POSTS_COLLECTION, photo_url
from vistagram.modules.photos.services.photo import delete_photo
from vistagram.modules.posts.comments.services.comment import (
    delete_comments_by_post, get_comments_by_post
)
from vistagram.modules.posts.schemas.post import PostWithComments

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("createdAt", -1), ("_id", -1)]

async def create_post_for_photo(
    db: AsyncIOMotorDatabase,
    *,
    user_id: str,
    photo_id: ObjectId,
    caption: Optional[str] = None,
    location: Optional[str] = None,
) -> ObjectId:
    """Create the post that publishes a freshly uploaded photo"""
    now = datetime.now(timezone.utc)
    post_doc = {
        "userId": user_id,
        "photoId": str(photo_id),
        "photoUrl": photo_url(photo_id),
        "caption": caption or "",
        "location": location or "",
        "likes": 0,
        "shares": 0,
        "comments": 0,
        "createdAt": now,
        "updatedAt": now,
    }
    result = await db[POSTS_COLLECTION].insert_one(post_doc)
    logger.info(f"Created post {result.inserted_id} for photo {photo_id}")
    return result.inserted_id

async def get_post(db: AsyncIOMotorDatabase, post_id: ObjectId) -> Optional[dict]:
    """Get post by ID"""
    return await db[POSTS_COLLECTION].find_one({"_id": post_id})

async def _with_comments(db: AsyncIOMotorDatabase, post: dict) -> PostWithComments:
    post_id = str(post["_id"])
    comments = await get_comments_by_post(db, post_id)
    return PostWithComments(
        id=post_id,
        mongo_id=post_id,
        user_id=post.get("userId", ""),
        photo_id=post.get("photoId", ""),
        photo_url=post.get("photoUrl", ""),
        caption=post.get("caption", ""),
        location=post.get("location", ""),
        likes=post.get("likes", 0),
        shares=post.get("shares", 0),
        comments=post.get("comments", 0),
        created_at=post["createdAt"],
        updated_at=post.get("updatedAt"),
        comments_list=comments,
    )

async def _posts_with_comments(db: AsyncIOMotorDatabase, query: dict) -> List[PostWithComments]:
    posts = await db[POSTS_COLLECTION].find(query).sort(NEWEST_FIRST).to_list(length=None)
    return list(await asyncio.gather(*(_with_comments(db, post) for post in posts)))

async def get_user_posts(db: AsyncIOMotorDatabase, user_id: str) -> List[PostWithComments]:
    """Get posts by user ID, newest first, each with its comments"""
    logger.info(f"Getting posts for user ID: {user_id}")
    return await _posts_with_comments(db, {"userId": user_id})

async def get_posts_by_ids(db: AsyncIOMotorDatabase, post_ids: Iterable[str]) -> List[PostWithComments]:
    """Get the existing posts among ``post_ids``, newest first; invalid IDs are skipped"""
    object_ids = [ObjectId(post_id) for post_id in set(post_ids) if ObjectId.is_valid(post_id)]
    if not object_ids:
        return []
    return await _posts_with_comments(db, {"_id": {"$in": object_ids}})

async def delete_post(db: AsyncIOMotorDatabase, post_id: ObjectId, user_id: str) -> bool:
    """
    Delete a post owned by ``user_id`` together with its photo and comments.

    Likes on the post are not removed.
    """
    post = await db[POSTS_COLLECTION].find_one({"_id": post_id, "userId": user_id})
    if not post:
        return False

    await db[POSTS_COLLECTION].delete_one({"_id": post_id, "userId": user_id})
    logger.info(f"Deleted post {post_id} for user {user_id}")

    photo_id = post.get("photoId")
    if photo_id and ObjectId.is_valid(photo_id):
        await delete_photo(db, ObjectId(photo_id), user_id)

    deleted_comments = await delete_comments_by_post(db, str(post_id))
    logger.info(f"Deleted {deleted_comments} comments of post {post_id}")
    return True
