from typing import Optional, List
from datetime import datetime

from pydantic import Field

from vistagram.core.schemas import CamelModel
from vistagram.modules.posts.comments.schemas.comment import Comment

class PostBase(CamelModel):
    caption: str = ""
    location: str = ""

class Post(PostBase):
    """Post model returned to client"""
    id: str
    # Same value as ``id``, under the document key stored posts carry
    mongo_id: str = Field(alias="_id")
    user_id: str
    photo_id: str
    photo_url: str
    likes: int = 0
    shares: int = 0
    comments: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

class PostWithComments(Post):
    """Post model with its comments, newest first"""
    comments_list: List[Comment] = []
