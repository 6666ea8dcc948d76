"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Query, Request
from sqlmodel import Session

from src.oilpress_admin.api.http.app_data import ApplicationDependencies
from src.oilpress_admin.core.listing import ListQuery
from src.oilpress_admin.core.services import DbSessionService, MediaUploadService
from src.oilpress_admin.runtime.context import get_config


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database session service instance."""
    return get_app_dependencies(request).database_service


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session for the duration of one request."""
    session = get_database_service(request).get_session()
    try:
        yield session
    finally:
        session.close()


def get_media_service(request: Request) -> MediaUploadService:
    """Get the media upload service instance."""
    return get_app_dependencies(request).media_service


def get_list_query(
    search: str = Query(default="", description="Case-insensitive text search"),
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
) -> ListQuery:
    """Build the paging part of a list query; filters are added per router."""
    listing = get_config().listing
    return ListQuery(
        search=search,
        page=page,
        page_size=min(page_size or listing.default_page_size, listing.max_page_size),
    )
