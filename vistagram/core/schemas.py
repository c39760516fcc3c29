from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema; snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserRef(CamelModel):
    """Request body naming the acting user"""
    user_id: Optional[str] = None


class SuccessResponse(CamelModel):
    success: bool = True
