"""Image host factory: builds the Cloudinary client from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from newsecho.infrastructure.external.images.cloudinary import CloudinaryImageHost

if TYPE_CHECKING:
    from newsecho.core.config import Settings


def create_image_host(
    settings: "Settings", http_client: httpx.AsyncClient | None = None
) -> CloudinaryImageHost | None:
    """Create the image host, or None when Cloudinary is not configured."""
    if not settings.cloudinary_cloud_name or not settings.cloudinary_upload_preset:
        return None
    return CloudinaryImageHost(
        settings.cloudinary_cloud_name,
        settings.cloudinary_upload_preset,
        base_url=settings.cloudinary_upload_url,
        max_size=settings.max_image_size,
        allowed_types=settings.allowed_image_type_set,
        http_client=http_client,
    )
