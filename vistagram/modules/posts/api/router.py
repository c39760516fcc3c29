from typing import Any, List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from vistagram.core.errors import APIError, internal_error
from vistagram.core.schemas import SuccessResponse, UserRef
from vistagram.db.collections import parse_object_id
from vistagram.db.session import get_db
from vistagram.modules.posts.schemas.post import PostWithComments
from vistagram.modules.posts.services.post import delete_post, get_user_posts

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/user/{user_id}", response_model=List[PostWithComments])
async def read_user_posts(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    user_id: str = Path(..., description="Author of the posts"),
) -> Any:
    """
    Get posts by user ID, newest first.
    Each post carries its comments in ``commentsList``.
    """
    try:
        return await get_user_posts(db, user_id)
    except Exception as e:
        logger.error(f"Get user posts error: {str(e)}", exc_info=True)
        raise internal_error("Failed to get user posts", e)

@router.delete("/{post_id}", response_model=SuccessResponse)
async def delete_post_by_id(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to delete"),
    owner: Optional[UserRef] = None,
) -> Any:
    """
    Delete a post and its associated data.
    This removes:
    1. The post itself
    2. The photo it shows
    3. All comments on the post
    Likes on the post are kept.
    """
    try:
        object_id = parse_object_id(post_id, "post")
        if owner is None or not owner.user_id:
            raise APIError(status.HTTP_400_BAD_REQUEST, "User ID is required")

        if not await delete_post(db, object_id, owner.user_id):
            raise APIError(status.HTTP_404_NOT_FOUND, "Post not found or unauthorized")

        return SuccessResponse()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Delete post error: {str(e)}", exc_info=True)
        raise internal_error("Failed to delete post", e)
