"""Image and video upload endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from src.oilpress_admin.api.http.deps import get_media_service
from src.oilpress_admin.core.services.media import (
    MediaFile,
    MediaUploadError,
    MediaUploadService,
    MediaValidationError,
    ensure_valid_image,
    ensure_valid_video,
    optimized_url,
    public_id_from_url,
    validate_image,
)

router = APIRouter()


async def _read(upload: UploadFile) -> MediaFile:
    return MediaFile(
        filename=upload.filename or "upload",
        content_type=upload.content_type or "application/octet-stream",
        data=await upload.read(),
    )


def _http_error(error: Exception) -> HTTPException:
    if isinstance(error, MediaValidationError):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=502, detail=str(error))


@router.post("/images")
async def upload_images(
    files: list[UploadFile] = File(...),
    folder: str | None = Form(default=None),
    section: str | None = Form(default=None, description="Dashboard section, e.g. gifts or banners"),
    media: MediaUploadService = Depends(get_media_service),
) -> dict:
    """Validate, compress and upload one or more images.

    An explicit ``folder`` wins over the folder configured for ``section``.
    """
    media_files = [await _read(f) for f in files]
    warnings = []
    try:
        folder = folder or media.folder_for(section)
        for media_file in media_files:
            result = ensure_valid_image(media_file, media.media_config)
            if result.warning:
                warnings.append(result.warning)
        urls = await media.upload_many(media_files, folder)
    except (MediaValidationError, MediaUploadError) as e:
        raise _http_error(e) from e
    return {"urls": urls, "warnings": warnings}


@router.post("/videos")
async def upload_video(
    file: UploadFile = File(...),
    folder: str | None = Form(default=None),
    section: str = Form(default="testimonials"),
    media: MediaUploadService = Depends(get_media_service),
) -> dict:
    media_file = await _read(file)
    try:
        folder = folder or media.folder_for(section)
        ensure_valid_video(media_file, media.media_config)
        url = await media.upload(media_file, folder)
    except (MediaValidationError, MediaUploadError) as e:
        raise _http_error(e) from e
    return {"url": url}


@router.post("/validate")
async def validate_upload(
    file: UploadFile = File(...),
    media: MediaUploadService = Depends(get_media_service),
) -> dict:
    """Dry-run the image checks without uploading anything."""
    return asdict(validate_image(await _read(file), media.media_config))


@router.get("/optimized-url")
def get_optimized_url(
    url: str | None = Query(default=None, description="Delivery URL of an uploaded image"),
    public_id: str | None = Query(default=None),
    width: int | None = Query(default=None, gt=0),
    height: int | None = Query(default=None, gt=0),
    quality: str = Query(default="auto:good"),
    media: MediaUploadService = Depends(get_media_service),
) -> dict[str, str]:
    public_id = public_id or public_id_from_url(url or "")
    if not public_id:
        raise HTTPException(status_code=422, detail="Provide either url or public_id")
    return {
        "public_id": public_id,
        "url": optimized_url(public_id, width, height, quality, media.media_config),
    }
