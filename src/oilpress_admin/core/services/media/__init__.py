"""Media validation, compression and upload."""

from .compression import compress_image, compress_image_async
from .errors import MediaError, MediaUploadError, MediaValidationError
from .media_file import MediaFile
from .upload_service import MediaUploadService, optimized_url, public_id_from_url
from .validation import (
    ValidationResult,
    ensure_valid_image,
    ensure_valid_video,
    validate_image,
)

__all__ = [
    "MediaError",
    "MediaFile",
    "MediaUploadError",
    "MediaUploadService",
    "MediaValidationError",
    "ValidationResult",
    "compress_image",
    "compress_image_async",
    "ensure_valid_image",
    "ensure_valid_video",
    "optimized_url",
    "public_id_from_url",
    "validate_image",
]
