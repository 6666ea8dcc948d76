"""Core services exports."""

from .database.db_session import DbSessionService
from .media.upload_service import MediaUploadService

__all__ = ["DbSessionService", "MediaUploadService"]
