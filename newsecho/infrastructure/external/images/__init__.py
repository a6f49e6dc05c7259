"""Image hosting (Cloudinary)."""

from newsecho.infrastructure.external.images.cloudinary import (
    CloudinaryImageHost,
    validate_image,
)
from newsecho.infrastructure.external.images.factory import create_image_host

__all__ = ["CloudinaryImageHost", "create_image_host", "validate_image"]
