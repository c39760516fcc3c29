from typing import List, Optional
from datetime import datetime

from pydantic import Field

from vistagram.core.schemas import CamelModel


class ClientComment(CamelModel):
    id: str
    user_id: str
    username: str
    text: str
    created_at: datetime


class UploadedPhoto(CamelModel):
    id: str
    url: str


class ClientPhoto(CamelModel):
    id: str
    post_id: Optional[str] = None
    url: str
    caption: str = ""
    location: str = ""
    created_at: datetime
    filename: str = ""
    likes: int = 0


class ClientPost(CamelModel):
    id: str
    user_id: str = ""
    photo_url: str
    caption: str = ""
    location: str = ""
    created_at: datetime
    likes: int = 0
    shares: int = 0
    comments: int = 0
    author: str = "Unknown User"
    comments_list: List[ClientComment] = Field(default_factory=list)


class LikeResult(CamelModel):
    success: bool
    liked: bool
    likes: int
