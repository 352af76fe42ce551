# app/services/media_uploader.py
"""
Media uploader — pushes an alert photo to Cloudinary and returns its public URL.

Endpoint: POST {CLOUDINARY_UPLOAD_URL}/{cloud_name}/image/upload  (signed upload)
Photos are limited to 800x600 with automatic quality/format on the Cloudinary side;
no image processing happens here.
"""

import hashlib
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from app.config import settings
from app.errors import UploadError
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Incoming transformation applied by Cloudinary before storing the asset
UPLOAD_TRANSFORMATION = "c_limit,h_600,w_800/q_auto/f_auto"


@dataclass
class Photo:
    content: bytes
    filename: str = "foto.jpg"
    content_type: str = "image/jpeg"


def sign_params(params: dict, api_secret: str) -> str:
    """Cloudinary signature: sha1 of the sorted 'k=v&k=v' string followed by the secret."""
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] not in (None, ""))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryUploader:
    def __init__(self, cloud_name: Optional[str], api_key: Optional[str], api_secret: Optional[str],
                 timeout: float = 15.0, base_url: str = "https://api.cloudinary.com/v1_1",
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}/{self.cloud_name}/image/upload"

    async def upload(self, photo: Photo) -> str:
        """
        Upload the photo and return its secure_url.
        Raises UploadError on timeout, transport failure, non-200 reply or a reply without a URL.
        """
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise UploadError("Media service is not configured")

        params = {"timestamp": str(int(time.time())), "transformation": UPLOAD_TRANSFORMATION}
        data = {**params, "api_key": self.api_key, "signature": sign_params(params, self.api_secret)}
        files = {"file": (photo.filename, photo.content, photo.content_type)}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.upload_url, data=data, files=files)
        except httpx.TimeoutException:
            logger.error(f"[UPLOAD] Timed out after {self.timeout}s ({len(photo.content)} bytes)")
            raise UploadError("Media service timed out")
        except httpx.HTTPError as e:
            logger.error(f"[UPLOAD] Transport failure: {e}")
            raise UploadError("Media service unreachable")

        if response.status_code != 200:
            logger.error(f"[UPLOAD] Media service returned HTTP {response.status_code}: {response.text[:200]}")
            raise UploadError(f"Media service returned HTTP {response.status_code}")

        try:
            url = response.json().get("secure_url")
        except ValueError:
            url = None
        if not url:
            raise UploadError("Media service reply did not include a URL")

        logger.info(f"[UPLOAD] Stored {photo.filename} ({len(photo.content)} bytes) → {url}")
        return url


def get_uploader() -> CloudinaryUploader:
    """FastAPI dependency — uploader built from settings."""
    return CloudinaryUploader(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        timeout=settings.MEDIA_UPLOAD_TIMEOUT_SECONDS,
        base_url=settings.CLOUDINARY_UPLOAD_URL,
    )
