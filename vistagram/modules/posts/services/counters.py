"""
Denormalized engagement counters stored on post documents.

Each counter has a single access function so handlers never build ``$inc``
updates themselves. Updates are single-document and are not tied to the
insert or delete of the like/comment they account for.
"""

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from vistagram.db.collections import POSTS_COLLECTION


async def _adjust_counter(db: AsyncIOMotorDatabase, post_id: ObjectId, field: str, delta: int) -> bool:
    query = {"_id": post_id}
    if delta < 0:
        # Counters never go below zero
        query[field] = {"$gte": -delta}
    result = await db[POSTS_COLLECTION].update_one(query, {"$inc": {field: delta}})
    return result.modified_count > 0


async def adjust_like_count(db: AsyncIOMotorDatabase, post_id: ObjectId, delta: int) -> bool:
    """Add ``delta`` to the post's ``likes`` counter"""
    return await _adjust_counter(db, post_id, "likes", delta)


async def adjust_comment_count(db: AsyncIOMotorDatabase, post_id: ObjectId, delta: int) -> bool:
    """Add ``delta`` to the post's ``comments`` counter"""
    return await _adjust_counter(db, post_id, "comments", delta)
