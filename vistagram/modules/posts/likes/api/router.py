from typing import Any, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from vistagram.core.errors import APIError, internal_error
from vistagram.core.schemas import UserRef
from vistagram.db.collections import parse_object_id
from vistagram.db.session import get_db
from vistagram.modules.posts.likes.schemas.like import LikeState, LikeToggled
from vistagram.modules.posts.likes.services.like import has_liked, toggle_like
from vistagram.modules.posts.services.post import get_post

router = APIRouter()
logger = logging.getLogger(__name__)

def _require_user(liker: Optional[UserRef]) -> str:
    if liker is None or not liker.user_id:
        raise APIError(status.HTTP_400_BAD_REQUEST, "User ID is required")
    return liker.user_id

@router.post("", response_model=LikeToggled)
async def toggle_post_like(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to like or unlike"),
    liker: Optional[UserRef] = None,
) -> Any:
    """Like the post, or unlike it if the user already liked it"""
    try:
        object_id = parse_object_id(post_id, "post")
        user_id = _require_user(liker)
        if not await get_post(db, object_id):
            raise APIError(status.HTTP_404_NOT_FOUND, "Post not found")

        liked, likes = await toggle_like(db, object_id, user_id)
        return LikeToggled(liked=liked, likes=likes)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Toggle like error: {str(e)}", exc_info=True)
        raise internal_error("Failed to toggle like", e)

@router.post("/check", response_model=LikeState)
async def check_post_like(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post"),
    liker: Optional[UserRef] = None,
) -> Any:
    """Tell whether the user has liked the post, without changing anything"""
    try:
        object_id = parse_object_id(post_id, "post")
        user_id = _require_user(liker)
        return LikeState(liked=await has_liked(db, object_id, user_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Check like error: {str(e)}", exc_info=True)
        raise internal_error("Failed to check like", e)
