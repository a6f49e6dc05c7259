"""Cloudinary unsigned upload (implements IImageHost).

POSTs multipart form data (file, upload_preset, public_id) to
<base>/<cloud_name>/image/upload and returns the secure_url from the
response. Files are validated (non-empty, size, content type) before any
network call.
"""

from __future__ import annotations

import logging

import httpx

from newsecho.domain.exceptions import ImageUploadException, ValidationException
from newsecho.shared.utils import sanitize_file_name
from newsecho.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


def validate_image(
    content: bytes, content_type: str, max_size: int, allowed_types: frozenset[str]
) -> None:
    """Raise ValidationException for empty, oversized or unsupported images."""
    if not content:
        raise ValidationException("Please select an image to upload", field="file")
    if len(content) > max_size:
        raise ValidationException(
            f"Image must be smaller than {max_size // (1024 * 1024)}MB", field="file"
        )
    if (content_type or "").lower() not in allowed_types:
        raise ValidationException(
            "Please upload a JPEG, PNG or GIF image", field="file"
        )


class CloudinaryImageHost:
    def __init__(
        self,
        cloud_name: str,
        upload_preset: str,
        *,
        base_url: str = "https://api.cloudinary.com/v1_1",
        max_size: int = 10 * 1024 * 1024,
        allowed_types: frozenset[str] = frozenset({"image/jpeg", "image/png", "image/gif"}),
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._upload_url = f"{base_url.rstrip('/')}/{cloud_name}/image/upload"
        self._upload_preset = upload_preset
        self._max_size = max_size
        self._allowed_types = allowed_types
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=60.0)

    async def upload(self, content: bytes, file_name: str, content_type: str) -> str:
        """Upload the image and return its public https URL."""
        validate_image(content, content_type, self._max_size, self._allowed_types)
        public_id = f"newsletter_{int(utc_now().timestamp() * 1000)}"
        safe_name = sanitize_file_name(file_name or "image")
        try:
            resp = await self._http.post(
                self._upload_url,
                data={"upload_preset": self._upload_preset, "public_id": public_id},
                files={"file": (safe_name, content, content_type)},
            )
        except httpx.HTTPError as e:
            logger.warning("Image upload to %s failed: %s", self._upload_url, e)
            raise ImageUploadException() from e
        if resp.status_code >= 400:
            logger.warning(
                "Image host rejected upload (%s): %s", resp.status_code, resp.text[:200]
            )
            raise ImageUploadException()
        secure_url = resp.json().get("secure_url")
        if not secure_url:
            raise ImageUploadException("Image host returned no URL")
        logger.info("Uploaded image %s as %s", safe_name, public_id)
        return secure_url
