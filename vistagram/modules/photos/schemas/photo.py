from typing import Optional
from datetime import datetime

from vistagram.core.schemas import CamelModel

class PhotoUploaded(CamelModel):
    success: bool = True
    photo_id: str
    url: str

class UserPhoto(CamelModel):
    """Photo metadata without the binary payload"""
    id: str
    post_id: Optional[str] = None
    url: str
    caption: str = ""
    location: str = ""
    created_at: datetime
    filename: str
    likes: int = 0
