"""Image upload API schemas."""

from pydantic import BaseModel


class ImageUploadResponse(BaseModel):
    url: str
