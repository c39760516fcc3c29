from typing import Optional
from datetime import datetime

from vistagram.core.schemas import CamelModel

class CommentCreate(CamelModel):
    user_id: Optional[str] = None
    username: Optional[str] = None
    text: Optional[str] = None

class Comment(CamelModel):
    """Comment model returned to client"""
    id: str
    user_id: str
    username: str
    text: str
    created_at: datetime

class CommentCreated(CamelModel):
    success: bool = True
    comment_id: str
    comment: Comment
