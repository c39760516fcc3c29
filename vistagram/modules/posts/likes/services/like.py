from typing import List, Optional, Tuple
from datetime import datetime, timezone
import logging

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from vistagram.db.collections import LIKES_COLLECTION
from vistagram.modules.posts.services.counters import adjust_like_count
from vistagram.modules.posts.services.post import get_post

logger = logging.getLogger(__name__)

async def get_like(db: AsyncIOMotorDatabase, post_id: ObjectId, user_id: str) -> Optional[dict]:
    """Get like by post ID and user ID"""
    return await db[LIKES_COLLECTION].find_one({"postId": str(post_id), "userId": user_id})

async def has_liked(db: AsyncIOMotorDatabase, post_id: ObjectId, user_id: str) -> bool:
    return await get_like(db, post_id, user_id) is not None

async def toggle_like(db: AsyncIOMotorDatabase, post_id: ObjectId, user_id: str) -> Tuple[bool, int]:
    """
    Like the post, or remove the like if the user already has one.

    Returns the new liked state and the post's like counter read back after
    the update. The lookup and the insert/delete are separate operations, so
    two concurrent toggles by the same user can both insert.
    """
    existing_like = await get_like(db, post_id, user_id)

    if existing_like:
        await db[LIKES_COLLECTION].delete_one({"_id": existing_like["_id"]})
        await adjust_like_count(db, post_id, -1)
        liked = False
    else:
        await db[LIKES_COLLECTION].insert_one({
            "postId": str(post_id),
            "userId": user_id,
            "createdAt": datetime.now(timezone.utc),
        })
        await adjust_like_count(db, post_id, 1)
        liked = True

    post = await get_post(db, post_id)
    likes = post.get("likes", 0) if post else 0
    logger.info(f"User {user_id} {'liked' if liked else 'unliked'} post {post_id} ({likes} likes)")
    return liked, likes

async def get_liked_post_ids(db: AsyncIOMotorDatabase, user_id: str) -> List[str]:
    """Get the IDs of the posts a user has liked, in no particular order"""
    cursor = db[LIKES_COLLECTION].find({"userId": user_id}, projection={"postId": 1})
    return [like["postId"] async for like in cursor]
