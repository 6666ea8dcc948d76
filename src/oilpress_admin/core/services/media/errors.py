"""Exceptions raised by the media services."""


class MediaError(Exception):
    """Base class for media failures surfaced to the admin."""


class MediaValidationError(MediaError):
    """The file was rejected before any upload was attempted."""


class MediaUploadError(MediaError):
    """The image host refused or failed the upload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
