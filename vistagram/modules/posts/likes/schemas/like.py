from vistagram.core.schemas import CamelModel

class LikeToggled(CamelModel):
    success: bool = True
    liked: bool
    likes: int

class LikeState(CamelModel):
    liked: bool
