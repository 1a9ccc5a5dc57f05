"""
Media Service - HTTP client for the external blob/media store

The store accepts raw media and answers with a stable URL (and, for
videos, the transcoded duration). Only the URL and duration are kept in
the database; bytes never are.
"""
import logging
import httpx
from typing import Optional, Dict, Any
from dataclasses import dataclass

from vidtube.errors import DependencyError
from vidtube.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass
class MediaUpload:
    """A file received from the client, read into memory"""
    content: bytes
    filename: str
    content_type: Optional[str] = None


class MediaService:
    """Service for uploading and deleting media blobs"""

    def __init__(self):
        settings = get_settings()
        self.base_url = (settings.media_store_url or "").rstrip("/")
        self.api_key = settings.media_store_api_key
        self.timeout = settings.media_timeout_seconds
        self.initialized = bool(self.base_url)

        if not self.initialized:
            logger.warning("MEDIA_STORE_URL not set - media uploads disabled")

    def is_initialized(self) -> bool:
        """Check if service is properly configured"""
        return self.initialized

    def _headers(self) -> Dict[str, str]:
        if self.api_key:
            return {"Authorization": f"Bearer {self.api_key}"}
        return {}

    async def upload(
        self,
        media: MediaUpload,
        resource_type: str = "auto"
    ) -> Dict[str, Any]:
        """
        Upload a media file.

        Args:
            media: File bytes plus client-reported name and MIME type
            resource_type: "video", "image" or "auto"

        Returns:
            Dict with ``url`` and ``duration`` (0.0 for non-video media)

        Raises:
            DependencyError: store not configured, unreachable, or rejected the upload
        """
        if not self.initialized:
            raise DependencyError("Media store is not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/upload",
                    headers=self._headers(),
                    data={"resource_type": resource_type},
                    files={"file": (media.filename, media.content, media.content_type or "application/octet-stream")}
                )
        except httpx.HTTPError as e:
            logger.error(f"Media upload failed for {media.filename}: {e}")
            raise DependencyError("Media store unreachable")

        if response.status_code >= 400:
            logger.error(f"Media store rejected {media.filename}: {response.status_code} {response.text}")
            raise DependencyError("Media upload failed")

        payload = response.json()
        url = payload.get("url") or payload.get("secure_url")
        if not url:
            logger.error(f"Media store returned no URL for {media.filename}: {payload}")
            raise DependencyError("Media upload failed")

        logger.info(f"Uploaded {resource_type} media: {url}")
        return {
            "url": url,
            "duration": float(payload.get("duration") or 0.0)
        }

    async def delete(self, url: str, resource_type: str = "auto") -> bool:
        """
        Delete a media file by its URL.

        Returns:
            True if the store confirmed deletion
        """
        if not self.initialized or not url:
            return False

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    "DELETE",
                    f"{self.base_url}/resources",
                    headers=self._headers(),
                    params={"url": url, "resource_type": resource_type}
                )
        except httpx.HTTPError as e:
            logger.error(f"Media delete failed for {url}: {e}")
            raise DependencyError("Media store unreachable")

        if response.status_code >= 400 and response.status_code != 404:
            logger.error(f"Media store refused delete of {url}: {response.status_code}")
            raise DependencyError("Media delete failed")

        return response.status_code < 400


# Singleton instance
_media_service: Optional[MediaService] = None


def get_media_service() -> MediaService:
    """Get or create Media service singleton"""
    global _media_service
    if _media_service is None:
        _media_service = MediaService()
    return _media_service
