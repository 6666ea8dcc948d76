"""Unsigned uploads to the image host."""

from __future__ import annotations

import asyncio

import httpx
from loguru import logger

from src.oilpress_admin.core.services.media.compression import compress_image_async
from src.oilpress_admin.core.services.media.errors import MediaUploadError, MediaValidationError
from src.oilpress_admin.core.services.media.media_file import MediaFile
from src.oilpress_admin.core.services.media.validation import ensure_valid_video
from src.oilpress_admin.runtime.config.config_data import CompressionConfig, MediaConfig
from src.oilpress_admin.runtime.context import get_config

_STATUS_MESSAGES = {
    400: "Upload configuration error. Please check the image host setup (cloud name and upload preset).",
    401: 'Unauthorized. Please check your upload preset is set to "Unsigned".',
    403: "Forbidden. Please check your upload preset permissions.",
}


def describe_upload_failure(response: httpx.Response) -> str:
    """Turn a failed upload response into a message for the admin."""
    if response.status_code in _STATUS_MESSAGES:
        return _STATUS_MESSAGES[response.status_code]

    body = response.text
    try:
        payload = response.json()
        message = payload.get("error", {}).get("message")
        if message:
            return f"Image host error: {message}"
    except (ValueError, AttributeError):
        pass
    if body:
        return f"Image host error: {body}"
    return f"Failed to upload file ({response.status_code}): {response.reason_phrase}"


def public_id_from_url(url: str) -> str:
    """Public id of an asset, taken from the last path segment of its URL."""
    if not url:
        return ""
    last_part = url.rstrip("/").split("/")[-1]
    return last_part.split(".")[0]


def optimized_url(
    public_id: str,
    width: int | None = None,
    height: int | None = None,
    quality: str = "auto:good",
    media_config: MediaConfig | None = None,
) -> str:
    """Delivery URL for ``public_id`` with quality and size transformations."""
    media_config = media_config or get_config().media
    base_url = f"{media_config.delivery_base_url.rstrip('/')}/{media_config.cloud_name}/image/upload"

    transformation = f"q_{quality}"
    if width and height:
        transformation += f",w_{width},h_{height},c_fill"
    elif width:
        transformation += f",w_{width},c_scale"
    elif height:
        transformation += f",h_{height},c_scale"

    return f"{base_url}/{transformation}/{public_id}"


class MediaUploadService:
    """Uploads images and videos with the configured unsigned preset.

    Images are compressed first when they exceed the compression threshold.
    """

    def __init__(
        self,
        media_config: MediaConfig | None = None,
        compression_config: CompressionConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        config = get_config()
        self._media = media_config or config.media
        self._compression = compression_config or config.compression
        self._transport = transport

    @property
    def media_config(self) -> MediaConfig:
        return self._media

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._media.timeout_seconds, transport=self._transport)

    def folder_for(self, section: str | None = None) -> str:
        """Configured folder for a dashboard section.

        Raises:
            MediaValidationError: If the section has no configured folder
        """
        try:
            return self._media.folders.for_section(section)
        except ValueError as e:
            raise MediaValidationError(str(e)) from e

    async def upload(self, file: MediaFile, folder: str | None = None) -> str:
        """Upload one image or video and return its secure URL.

        Raises:
            MediaValidationError: If the file type is unsupported or a video is too large
            MediaUploadError: If the image host rejects the upload
        """
        folder = folder or self.folder_for()
        logger.info(
            "Uploading file: {}, type: {}, size: {:.2f}MB", file.filename, file.content_type, file.size_mb
        )

        if file.is_image:
            processed = await compress_image_async(file, self._compression)
            upload_url = self._media.image_upload_url
        else:
            ensure_valid_video(file, self._media)
            processed = file
            upload_url = self._media.video_upload_url

        form = {"upload_preset": self._media.upload_preset, "folder": folder}
        if processed.is_video:
            form["resource_type"] = "video"
        files = {"file": (processed.filename, processed.data, processed.content_type)}

        try:
            async with self._client() as client:
                response = await client.post(upload_url, data=form, files=files)
        except httpx.HTTPError as e:
            logger.error("Upload request failed: {}: {}", type(e).__name__, e)
            raise MediaUploadError("Failed to upload file. Please try again.") from e

        if response.is_error:
            message = describe_upload_failure(response)
            logger.error(
                "Image host rejected upload (status {}): {}", response.status_code, response.text
            )
            raise MediaUploadError(message, status_code=response.status_code)

        secure_url = response.json().get("secure_url")
        if not secure_url:
            raise MediaUploadError("Image host response did not include a URL")
        logger.info("Uploaded {} to {}", processed.filename, secure_url)
        return secure_url

    async def upload_many(self, files: list[MediaFile], folder: str | None = None) -> list[str]:
        """Upload ``files`` concurrently, preserving their order in the result."""
        return list(await asyncio.gather(*(self.upload(f, folder) for f in files)))
