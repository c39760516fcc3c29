from typing import Any, List, Optional
import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, Path, Response, UploadFile, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from vistagram.core.config import settings
from vistagram.core.errors import APIError, internal_error
from vistagram.core.schemas import SuccessResponse, UserRef
from vistagram.db.collections import parse_object_id, photo_url
from vistagram.db.session import get_db
from vistagram.modules.photos.schemas.photo import PhotoUploaded, UserPhoto
from vistagram.modules.photos.services.photo import (
    create_photo, delete_photo, get_photo_binary, get_user_photos
)
from vistagram.modules.posts.services.post import create_post_for_photo

logger = logging.getLogger(__name__)

router = APIRouter()

async def _read_image(photo: Optional[UploadFile]) -> bytes:
    """Read the uploaded image or raise HTTPException"""
    if photo is None or not photo.filename:
        raise APIError(status.HTTP_400_BAD_REQUEST, "No file uploaded")

    if not (photo.content_type or "").startswith("image/"):
        raise APIError(status.HTTP_400_BAD_REQUEST, "Only image files are allowed")

    data = await photo.read(settings.MAX_UPLOAD_SIZE + 1)
    if len(data) > settings.MAX_UPLOAD_SIZE:
        raise APIError(
            status.HTTP_400_BAD_REQUEST,
            "File too large",
            f"Maximum size is {settings.MAX_UPLOAD_SIZE} bytes",
        )
    return data

def _content_disposition(filename: str) -> str:
    """Inline disposition with an ASCII fallback and the UTF-8 name (RFC 5987)"""
    fallback = "".join(
        char if 32 <= ord(char) < 127 and char not in '"\\' else "_"
        for char in filename
    )
    return f"inline; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"

@router.post("/upload", response_model=PhotoUploaded)
async def upload_photo(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    photo: Optional[UploadFile] = File(None),
    user_id: Optional[str] = Form(None, alias="userId"),
    caption: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
) -> Any:
    """
    Upload a photo and publish it as a post.

    The photo and the post are two separate inserts; if the second one fails
    the photo stays without a post.
    """
    try:
        data = await _read_image(photo)
        if not user_id:
            raise APIError(status.HTTP_400_BAD_REQUEST, "User ID is required")

        photo_id = await create_photo(
            db,
            user_id=user_id,
            filename=photo.filename,
            mimetype=photo.content_type,
            data=data,
            caption=caption,
            location=location,
        )
        await create_post_for_photo(
            db,
            user_id=user_id,
            photo_id=photo_id,
            caption=caption,
            location=location,
        )
        return PhotoUploaded(photo_id=str(photo_id), url=photo_url(photo_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Upload error: {str(e)}", exc_info=True)
        raise internal_error("Upload failed", e)

@router.get("/user/{user_id}", response_model=List[UserPhoto])
async def read_user_photos(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    user_id: str = Path(..., description="Owner of the photos"),
) -> Any:
    """Get a user's photos, newest first, without image data"""
    try:
        return await get_user_photos(db, user_id)
    except Exception as e:
        logger.error(f"Get user photos error: {str(e)}", exc_info=True)
        raise internal_error("Failed to get user photos", e)

@router.get("/{photo_id}")
async def read_photo(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    photo_id: str = Path(..., description="The ID of the photo"),
) -> Response:
    """Serve the raw image bytes. Anyone holding the ID can fetch them."""
    try:
        object_id = parse_object_id(photo_id, "photo")
        photo = await get_photo_binary(db, object_id)
        if not photo:
            raise APIError(status.HTTP_404_NOT_FOUND, "Photo not found")

        return Response(
            content=bytes(photo["data"]),
            media_type=photo.get("mimetype") or "application/octet-stream",
            headers={
                "Content-Disposition": _content_disposition(photo.get("filename", "")),
                "Access-Control-Allow-Origin": "*",
                "Cache-Control": "public, max-age=31536000",
            },
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Get photo error: {str(e)}", exc_info=True)
        raise internal_error("Failed to get photo", e)

@router.delete("/{photo_id}", response_model=SuccessResponse)
async def delete_photo_by_id(
    *,
    db: AsyncIOMotorDatabase = Depends(get_db),
    photo_id: str = Path(..., description="The ID of the photo to delete"),
    owner: Optional[UserRef] = None,
) -> Any:
    """
    Delete a photo owned by the given user.

    The post showing the photo is kept and will point at a missing image.
    """
    try:
        object_id = parse_object_id(photo_id, "photo")
        if owner is None or not owner.user_id:
            raise APIError(status.HTTP_400_BAD_REQUEST, "User ID is required")

        if not await delete_photo(db, object_id, owner.user_id):
            raise APIError(status.HTTP_404_NOT_FOUND, "Photo not found or unauthorized")

        return SuccessResponse()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Delete photo error: {str(e)}", exc_info=True)
        raise internal_error("Failed to delete photo", e)
