from dataclasses import dataclass

from src.oilpress_admin.core.services import DbSessionService, MediaUploadService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    media_service: MediaUploadService
