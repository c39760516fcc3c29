from typing import Any, List
import logging

from fastapi import APIRouter, Depends, Path
from motor.motor_asyncio import AsyncIOMotorDatabase

from vistagram.core.errors import internal_error
from vistagram.db.session import get_db
from vistagram.modules.posts.likes.services.like import get_liked_post_ids
from vistagram.modules.posts.schemas.post import PostWithComments
from vistagram.modules.posts.services.post import get_posts_by_ids

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/{user_id}/liked-posts", response_model=List[PostWithComments])
async def read_liked_posts(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    user_id: str = Path(..., description="The user whose likes to list"),
) -> Any:
    """
    Get the posts a user has liked, newest post first, with comments.
    Likes pointing at deleted posts are skipped.
    """
    try:
        post_ids = await get_liked_post_ids(db, user_id)
        return await get_posts_by_ids(db, post_ids)
    except Exception as e:
        logger.error(f"Get liked posts error: {str(e)}", exc_info=True)
        raise internal_error("Failed to get liked posts", e)
