"""Admin image uploads for newsletter headers."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile

from newsecho.api.v1.dependencies import get_image_host
from newsecho.application.interfaces import IImageHost
from newsecho.core.limiter import limit_upload
from newsecho.schemas.upload import ImageUploadResponse

router = APIRouter()


@router.post("/images", response_model=ImageUploadResponse, status_code=201)
@limit_upload
async def upload_image(
    request: Request,
    image_host: Annotated[IImageHost, Depends(get_image_host)],
    file: Annotated[UploadFile, File(description="JPEG, PNG or GIF, at most 10MB")],
):
    """Upload to the image host and return the public URL to store as imageUrl."""
    content = await file.read()
    url = await image_host.upload(
        content, file.filename or "image", file.content_type or "application/octet-stream"
    )
    return ImageUploadResponse(url=url)
