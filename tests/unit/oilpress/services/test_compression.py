"""Unit tests for oversized-image compression."""

import io

import pytest
from PIL import Image

from src.oilpress_admin.core.services.media import compression
from src.oilpress_admin.core.services.media.compression import (
    compress_image,
    compress_image_async,
    scale_ratio,
    starting_quality,
)
from src.oilpress_admin.core.services.media.media_file import MediaFile
from src.oilpress_admin.runtime.config.config_data import CompressionConfig
from tests.utils import noise_image, solid_image

MB = 1024 * 1024


def _png(data: bytes, name: str = "photo.png") -> MediaFile:
    return MediaFile(filename=name, content_type="image/png", data=data)


class TestPolicy:
    """Scale and quality brackets from the default configuration."""

    @pytest.mark.parametrize(
        "size,expected",
        [(25 * MB, 0.3), (18 * MB, 0.4), (12 * MB, 0.5), (6 * MB, 0.7)],
    )
    def test_scale_is_capped_by_bracket(self, size, expected):
        assert scale_ratio(size, CompressionConfig()) == pytest.approx(expected)

    def test_scale_uses_budget_ratio_when_smaller_than_cap(self):
        cfg = CompressionConfig(target_bytes=1 * MB)
        assert scale_ratio(16 * MB, cfg) == pytest.approx(0.25)

    @pytest.mark.parametrize(
        "size,expected",
        [(16 * MB, 0.3), (12 * MB, 0.4), (9 * MB, 0.5), (8 * MB, 0.6), (6 * MB, 0.6)],
    )
    def test_starting_quality_by_bracket(self, size, expected):
        assert starting_quality(size, CompressionConfig()) == expected

    def test_tiers_are_sorted_largest_first(self):
        cfg = CompressionConfig(
            scale_tiers=[
                {"min_bytes": 10 * MB, "value": 0.5},
                {"min_bytes": 20 * MB, "value": 0.3},
            ]
        )
        assert [t.min_bytes for t in cfg.scale_tiers] == [20 * MB, 10 * MB]
        assert scale_ratio(25 * MB, cfg) == pytest.approx(0.3)


class TestCompressImage:
    """Test cases for compress_image."""

    def test_small_image_returned_untouched(self, compression_config):
        original = _png(solid_image(10, 10))
        assert compress_image(original, compression_config) is original

    def test_disabled_compression_returns_original(self, compression_config):
        cfg = compression_config.model_copy(update={"enabled": False})
        original = _png(noise_image(300, 300))
        assert compress_image(original, cfg) is original

    def test_large_image_shrinks_to_jpeg(self, compression_config):
        original = _png(noise_image(300, 300))
        assert original.size > compression_config.threshold_bytes

        result = compress_image(original, compression_config)

        assert result is not original
        assert result.size < original.size
        assert result.filename == "photo.jpg"
        assert result.content_type == "image/jpeg"
        with Image.open(io.BytesIO(result.data)) as img:
            assert img.format == "JPEG"
            assert img.size[0] < 300

    def test_transparent_image_is_flattened(self, compression_config):
        original = _png(noise_image(300, 300, mode="RGBA"))
        result = compress_image(original, compression_config)
        with Image.open(io.BytesIO(result.data)) as img:
            assert img.mode == "RGB"

    def test_undecodable_bytes_return_original(self, compression_config):
        original = _png(b"\x00not-an-image" * 10_000)
        assert compress_image(original, compression_config) is original

    def test_keeps_original_when_jpeg_is_not_smaller(self):
        # A tiny flat PNG beats any JPEG encoding of it
        cfg = CompressionConfig(threshold_bytes=0, target_bytes=1)
        original = _png(solid_image(8, 8))
        assert compress_image(original, cfg) is original

    def test_lowers_quality_until_floor(self, monkeypatch):
        qualities = []
        real_encode = compression._encode_jpeg

        def recording_encode(img, quality_pct):
            qualities.append(quality_pct)
            return real_encode(img, quality_pct)

        monkeypatch.setattr(compression, "_encode_jpeg", recording_encode)
        cfg = CompressionConfig(threshold_bytes=1000, target_bytes=10, scale_tiers=[], quality_tiers=[])

        compress_image(_png(noise_image(120, 120)), cfg)

        assert qualities == [60, 50, 40, 30, 20, 10]

    def test_attempts_are_bounded(self, monkeypatch):
        qualities = []
        real_encode = compression._encode_jpeg

        def recording_encode(img, quality_pct):
            qualities.append(quality_pct)
            return real_encode(img, quality_pct)

        monkeypatch.setattr(compression, "_encode_jpeg", recording_encode)
        cfg = CompressionConfig(
            threshold_bytes=1000, target_bytes=10, max_attempts=3, scale_tiers=[], quality_tiers=[]
        )

        compress_image(_png(noise_image(120, 120)), cfg)

        assert qualities == [60, 50, 40]

    def test_encoder_failure_returns_original(self, monkeypatch, compression_config):
        def broken_encode(img, quality_pct):
            raise OSError("encoder missing")

        monkeypatch.setattr(compression, "_encode_jpeg", broken_encode)
        original = _png(noise_image(300, 300))
        assert compress_image(original, compression_config) is original

    @pytest.mark.asyncio
    async def test_async_variant_matches(self, compression_config):
        original = _png(noise_image(300, 300))
        result = await compress_image_async(original, compression_config)
        assert result.content_type == "image/jpeg"
        assert result.size < original.size
