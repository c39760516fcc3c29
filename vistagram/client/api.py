"""
Async client for the Vistagram REST API.

Translates UI actions into HTTP calls and normalises what comes back:
timestamps become ``datetime`` objects and relative photo URLs become
absolute ones. Read operations log failures and return an empty value;
``add_comment`` and ``toggle_like`` raise ``VistagramAPIError`` so the
caller can show the error.
"""

from typing import Any, List, Optional
import logging

import httpx

from vistagram.core.config import settings
from vistagram.client.schemas import (
    ClientComment, ClientPhoto, ClientPost, LikeResult, UploadedPhoto
)

logger = logging.getLogger(__name__)


class VistagramAPIError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def ensure_full_url(url: str, base_url: str) -> str:
    """Make ``url`` absolute against ``base_url``"""
    base_url = base_url.rstrip("/")
    if url.startswith("http://") or url.startswith("https://"):
        return url
    if url.startswith("://"):
        return f"http{url}"
    if url.startswith("/"):
        return f"{base_url}{url}"
    return f"{base_url}/{url}"


class VistagramClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "VistagramClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def ensure_full_url(self, url: str) -> str:
        return ensure_full_url(url, self.base_url)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            raise VistagramAPIError(
                f"{method} {path} failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                body=response.text,
            )
        return response.json()

    def _post_from_json(self, data: dict) -> ClientPost:
        post = ClientPost.model_validate(data)
        post.photo_url = self.ensure_full_url(post.photo_url)
        return post

    async def upload_photo(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        user_id: str,
        caption: Optional[str] = None,
        location: Optional[str] = None,
    ) -> Optional[UploadedPhoto]:
        form = {"userId": user_id}
        if caption:
            form["caption"] = caption
        if location:
            form["location"] = location
        try:
            result = await self._request(
                "POST",
                "/api/photos/upload",
                data=form,
                files={"photo": (filename, content, content_type)},
            )
        except (httpx.HTTPError, VistagramAPIError) as e:
            logger.error(f"Photo upload failed: {e}")
            return None

        if result.get("success"):
            return UploadedPhoto(id=result["photoId"], url=self.ensure_full_url(result["url"]))
        return None

    async def get_user_photos(self, user_id: str) -> List[ClientPhoto]:
        try:
            photos = await self._request("GET", f"/api/photos/user/{user_id}")
        except (httpx.HTTPError, VistagramAPIError) as e:
            logger.error(f"Failed to get user photos: {e}")
            return []

        result = []
        for data in photos:
            photo = ClientPhoto.model_validate(data)
            photo.url = self.ensure_full_url(photo.url)
            result.append(photo)
        return result

    async def delete_photo(self, photo_id: str, user_id: str) -> bool:
        try:
            result = await self._request("DELETE", f"/api/photos/{photo_id}", json={"userId": user_id})
        except (httpx.HTTPError, VistagramAPIError) as e:
            logger.error(f"Photo deletion failed: {e}")
            return False
        return bool(result.get("success"))

    async def delete_post(self, post_id: str, user_id: str) -> bool:
        logger.debug(f"Deleting post {post_id} for user {user_id}")
        try:
            result = await self._request("DELETE", f"/api/posts/{post_id}", json={"userId": user_id})
        except (httpx.HTTPError, VistagramAPIError) as e:
            logger.error(f"Post deletion failed: {e}")
            return False
        return bool(result.get("success"))

    async def get_user_posts(self, user_id: str) -> List[ClientPost]:
        try:
            posts = await self._request("GET", f"/api/posts/user/{user_id}")
        except (httpx.HTTPError, VistagramAPIError) as e:
            logger.error(f"Failed to get user posts: {e}")
            return []
        return [self._post_from_json(post) for post in posts]

    async def add_comment(self, post_id: str, user_id: str, username: str, text: str) -> Optional[ClientComment]:
        try:
            result = await self._request(
                "POST",
                f"/api/posts/{post_id}/comments",
                json={"userId": user_id, "username": username, "text": text},
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to add comment: {e}")
            raise VistagramAPIError(f"Failed to add comment: {e}") from e

        if result.get("success"):
            return ClientComment.model_validate(result["comment"])
        return None

    async def get_comments(self, post_id: str) -> List[ClientComment]:
        try:
            comments = await self._request("GET", f"/api/posts/{post_id}/comments")
        except (httpx.HTTPError, VistagramAPIError) as e:
            logger.error(f"Failed to get comments: {e}")
            return []
        return [ClientComment.model_validate(comment) for comment in comments]

    async def toggle_like(self, post_id: str, user_id: str) -> LikeResult:
        try:
            result = await self._request("POST", f"/api/posts/{post_id}/like", json={"userId": user_id})
        except httpx.HTTPError as e:
            logger.error(f"Toggle like failed: {e}")
            raise VistagramAPIError(f"Failed to toggle like: {e}") from e
        return LikeResult.model_validate(result)

    async def check_user_like(self, post_id: str, user_id: str) -> bool:
        try:
            result = await self._request("POST", f"/api/posts/{post_id}/like/check", json={"userId": user_id})
        except (httpx.HTTPError, VistagramAPIError) as e:
            logger.error(f"Check user like failed: {e}")
            return False
        return bool(result.get("liked"))

    async def get_user_liked_posts(self, user_id: str) -> List[ClientPost]:
        try:
            posts = await self._request("GET", f"/api/users/{user_id}/liked-posts")
        except (httpx.HTTPError, VistagramAPIError) as e:
            logger.error(f"Failed to get user liked posts: {e}")
            return []
        return [self._post_from_json(post) for post in posts]

    async def check_server_health(self) -> bool:
        try:
            response = await self._client.get("/api/health")
        except httpx.HTTPError as e:
            logger.error(f"Server health check failed: {e}")
            return False
        return response.is_success
