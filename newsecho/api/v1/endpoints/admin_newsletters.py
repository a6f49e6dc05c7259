"""Admin newsletter management: list with search/status filter, create, edit, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from newsecho.api.v1.dependencies import get_newsletter_service
from newsecho.application.services import NewsletterService
from newsecho.core.limiter import limit_writes
from newsecho.domain.enums import NewsletterStatusFilter
from newsecho.schemas.newsletter import NewsletterResponse, NewsletterWrite

router = APIRouter()

Newsletters = Annotated[NewsletterService, Depends(get_newsletter_service)]


@router.get("", response_model=list[NewsletterResponse])
async def list_newsletters(
    newsletters: Newsletters,
    search: Annotated[str | None, Query(max_length=200)] = None,
    status: NewsletterStatusFilter = NewsletterStatusFilter.ALL,
):
    """All newsletters, most recently updated first."""
    views = await newsletters.list_admin(search=search, status=status)
    return [NewsletterResponse.from_view(v) for v in views]


@router.post("", response_model=NewsletterResponse, status_code=201)
@limit_writes
async def create_newsletter(request: Request, body: NewsletterWrite, newsletters: Newsletters):
    """Save a draft or publish. Blank title or content is rejected with 400."""
    return NewsletterResponse.from_view(await newsletters.create(body.to_draft()))


@router.get("/{newsletter_id}", response_model=NewsletterResponse)
async def get_newsletter(newsletter_id: str, newsletters: Newsletters):
    return NewsletterResponse.from_view(await newsletters.get(newsletter_id))


@router.put("/{newsletter_id}", response_model=NewsletterResponse)
@limit_writes
async def update_newsletter(
    request: Request, newsletter_id: str, body: NewsletterWrite, newsletters: Newsletters
):
    return NewsletterResponse.from_view(await newsletters.update(newsletter_id, body.to_draft()))


@router.delete("/{newsletter_id}", status_code=204)
@limit_writes
async def delete_newsletter(request: Request, newsletter_id: str, newsletters: Newsletters):
    await newsletters.delete(newsletter_id)
    return Response(status_code=204)
