from typing import List, Optional
from datetime import datetime, timezone
import logging

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from vistagram.db.collections import COMMENTS_COLLECTION
from vistagram.modules.posts.comments.schemas.comment import Comment
from vistagram.modules.posts.services.counters import adjust_comment_count

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "Anonymous"

def comment_from_doc(doc: dict) -> Comment:
    return Comment(
        id=str(doc["_id"]),
        user_id=doc.get("userId", ""),
        username=doc.get("username") or DEFAULT_USERNAME,
        text=doc.get("text", ""),
        created_at=doc["createdAt"],
    )

async def get_comments_by_post(db: AsyncIOMotorDatabase, post_id: str) -> List[Comment]:
    """Get comments by post ID, newest first"""
    cursor = db[COMMENTS_COLLECTION].find({"postId": post_id}).sort(
        [("createdAt", -1), ("_id", -1)]
    )
    return [comment_from_doc(doc) async for doc in cursor]

async def create_comment(
    db: AsyncIOMotorDatabase,
    post_id: ObjectId,
    user_id: str,
    text: str,
    username: Optional[str] = None,
) -> Comment:
    """
    Insert a comment and bump the post's comment counter.

    The counter is incremented after the insert as a separate update; a
    failure between the two leaves the counter one short.
    """
    now = datetime.now(timezone.utc)
    comment_doc = {
        "postId": str(post_id),
        "userId": user_id,
        "username": username or DEFAULT_USERNAME,
        "text": text,
        "createdAt": now,
        "updatedAt": now,
    }
    result = await db[COMMENTS_COLLECTION].insert_one(comment_doc)
    comment_doc["_id"] = result.inserted_id
    logger.info(f"Created comment {result.inserted_id} on post {post_id}")

    await adjust_comment_count(db, post_id, 1)
    return comment_from_doc(comment_doc)

async def delete_comments_by_post(db: AsyncIOMotorDatabase, post_id: str) -> int:
    """Delete every comment referencing the post"""
    result = await db[COMMENTS_COLLECTION].delete_many({"postId": post_id})
    return result.deleted_count
