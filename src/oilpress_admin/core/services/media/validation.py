"""Pre-upload checks on image files."""

from __future__ import annotations

from dataclasses import dataclass

from src.oilpress_admin.core.services.media.errors import MediaValidationError
from src.oilpress_admin.core.services.media.media_file import MediaFile
from src.oilpress_admin.runtime.config.config_data import MediaConfig

INVALID_TYPE_MESSAGE = "Please select a valid image file (JPEG, PNG, GIF, or WebP)"


@dataclass
class ValidationResult:
    is_valid: bool
    error: str | None = None
    warning: str | None = None


def _mb_label(limit: int) -> str:
    return f"{limit // (1024 * 1024)}MB"


def validate_image(file: MediaFile, media_config: MediaConfig) -> ValidationResult:
    """Check an image's type and size against the configured limits.

    Files above the warning size are accepted with a note that they will
    be compressed.
    """
    if file.content_type.lower() not in media_config.allowed_image_types:
        return ValidationResult(is_valid=False, error=INVALID_TYPE_MESSAGE)

    if file.size > media_config.max_image_bytes:
        return ValidationResult(
            is_valid=False,
            error=f"Image size should be less than {_mb_label(media_config.max_image_bytes)}",
        )

    if file.size > media_config.warn_image_bytes:
        return ValidationResult(
            is_valid=True,
            warning=(
                f"Large file detected ({file.size_mb:.1f}MB). "
                "Image will be automatically compressed for faster upload."
            ),
        )

    return ValidationResult(is_valid=True)


def ensure_valid_image(file: MediaFile, media_config: MediaConfig) -> ValidationResult:
    """Like :func:`validate_image` but raises on rejection."""
    result = validate_image(file, media_config)
    if not result.is_valid:
        raise MediaValidationError(result.error)
    return result


def ensure_valid_video(file: MediaFile, media_config: MediaConfig) -> None:
    if not file.is_video:
        raise MediaValidationError(f"Unsupported file type: {file.content_type}")
    if file.size > media_config.max_video_bytes:
        raise MediaValidationError(
            f"Video file is too large ({file.size_mb:.2f}MB). "
            f"Maximum allowed size is {_mb_label(media_config.max_video_bytes)}."
        )
