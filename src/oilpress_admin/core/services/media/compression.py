"""Shrink oversized images before they are sent to the image host.

Images above ``compression.threshold_bytes`` are downscaled towards a byte
budget and re-encoded as JPEG, lowering the quality step by step while the
result is still over budget. Compression never raises: any failure yields
the original file.
"""

from __future__ import annotations

import asyncio
import io
import math

from loguru import logger
from PIL import Image

from src.oilpress_admin.core.services.media.media_file import MediaFile
from src.oilpress_admin.runtime.config.config_data import CompressionConfig, SizeTier
from src.oilpress_admin.runtime.context import get_config


def _tier_value(size: int, tiers: list[SizeTier], default: float) -> float:
    for tier in tiers:
        if size > tier.min_bytes:
            return tier.value
    return default


def scale_ratio(size: int, cfg: CompressionConfig) -> float:
    """Linear scale factor for an image of ``size`` bytes."""
    ratio = math.sqrt(cfg.target_bytes / size)
    return min(ratio, _tier_value(size, cfg.scale_tiers, cfg.default_scale_cap))


def starting_quality(size: int, cfg: CompressionConfig) -> float:
    return _tier_value(size, cfg.quality_tiers, cfg.default_quality)


def _to_percent(value: float) -> int:
    return int(round(value * 100))


def _flatten_to_rgb(img: Image.Image) -> Image.Image:
    if img.mode == "P" and "transparency" in img.info:
        img = img.convert("RGBA")
    if img.mode in ("RGBA", "LA"):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def _encode_jpeg(img: Image.Image, quality_pct: int) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=max(1, min(quality_pct, 95)), optimize=True)
    return buffer.getvalue()


def _compress(file: MediaFile, cfg: CompressionConfig) -> MediaFile:
    with Image.open(io.BytesIO(file.data)) as source:
        source.load()
        width, height = source.size
        ratio = scale_ratio(file.size, cfg)
        new_size = (max(1, math.floor(width * ratio)), max(1, math.floor(height * ratio)))
        logger.debug(
            "Resizing {} from {}x{} to {}x{} (ratio {:.2f})",
            file.filename, width, height, new_size[0], new_size[1], ratio,
        )
        resized = _flatten_to_rgb(source).resize(new_size, Image.Resampling.LANCZOS)

    quality = _to_percent(starting_quality(file.size, cfg))
    step = _to_percent(cfg.quality_step)
    floor_quality = _to_percent(cfg.min_quality)

    best: bytes | None = None
    attempt = 1
    while True:
        data = _encode_jpeg(resized, quality)
        logger.debug(
            "Compression attempt {} at quality {}: {:.2f}MB", attempt, quality / 100, len(data) / 1024 / 1024
        )
        if best is None or len(data) < len(best):
            best = data
        if len(data) > cfg.target_bytes and quality > floor_quality and attempt < cfg.max_attempts:
            quality -= step
            attempt += 1
            continue
        break

    if len(best) >= file.size:
        logger.info("Compression did not reduce {}; keeping original", file.filename)
        return file

    logger.info(
        "Compressed {}: {:.2f}MB -> {:.2f}MB", file.filename, file.size_mb, len(best) / 1024 / 1024
    )
    return file.as_jpeg(best)


def compress_image(file: MediaFile, cfg: CompressionConfig | None = None) -> MediaFile:
    """Return ``file`` shrunk to fit the compression budget, or unchanged.

    Args:
        file: Image to compress
        cfg: Compression policy; defaults to the active configuration

    Returns:
        A new ``.jpg`` file when compression helped, otherwise ``file`` itself
    """
    cfg = cfg or get_config().compression

    if not cfg.enabled or file.size <= cfg.threshold_bytes:
        return file

    try:
        return _compress(file, cfg)
    except Exception as e:
        logger.warning(
            "Could not compress {} ({}: {}); uploading original", file.filename, type(e).__name__, e
        )
        return file


async def compress_image_async(file: MediaFile, cfg: CompressionConfig | None = None) -> MediaFile:
    """Run :func:`compress_image` in a worker thread."""
    cfg = cfg or get_config().compression
    return await asyncio.to_thread(compress_image, file, cfg)
