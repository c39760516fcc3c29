from typing import Any, List, Optional
import logging

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, Path, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from vistagram.core.errors import APIError, internal_error
from vistagram.db.collections import parse_object_id
from vistagram.db.session import get_db
from vistagram.modules.posts.comments.schemas.comment import (
    Comment as CommentSchema, CommentCreate, CommentCreated
)
from vistagram.modules.posts.comments.services.comment import create_comment, get_comments_by_post
from vistagram.modules.posts.services.post import get_post

router = APIRouter()
logger = logging.getLogger(__name__)

async def _validate_post(db: AsyncIOMotorDatabase, post_id: ObjectId) -> None:
    """Validate post exists or raise HTTPException"""
    if not await get_post(db, post_id):
        raise APIError(status.HTTP_404_NOT_FOUND, "Post not found")

@router.post("", response_model=CommentCreated)
async def create_new_comment(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to comment on"),
    comment_in: Optional[CommentCreate] = None,
) -> Any:
    """Add a comment to a post and bump its comment counter"""
    try:
        if comment_in is None or not comment_in.user_id or not comment_in.text:
            raise APIError(status.HTTP_400_BAD_REQUEST, "User ID and comment text are required")

        object_id = parse_object_id(post_id, "post")
        await _validate_post(db, object_id)

        comment = await create_comment(
            db,
            object_id,
            user_id=comment_in.user_id,
            text=comment_in.text,
            username=comment_in.username,
        )
        return CommentCreated(comment_id=comment.id, comment=comment)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error adding comment: {str(e)}", exc_info=True)
        raise internal_error("Failed to add comment", e)

@router.get("", response_model=List[CommentSchema])
async def read_comments_by_post_id(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to get comments for"),
) -> Any:
    """Get comments by post ID, newest first"""
    try:
        object_id = parse_object_id(post_id, "post")
        return await get_comments_by_post(db, str(object_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting comments: {str(e)}", exc_info=True)
        raise internal_error("Failed to get comments", e)
