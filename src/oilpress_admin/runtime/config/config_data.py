"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field, field_validator

_MB = 1024 * 1024


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str = Field(default="", description="Log file path (empty disables file sink)")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Document store database configuration."""

    url: str = Field(
        default="sqlite:///./oilpress_admin.db",
        description="Database connection URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL points at SQLite."""
        return self.url.startswith("sqlite")


class AdminConfig(BaseModel):
    """Credentials accepted by the admin HTTP Basic check."""

    enabled: bool = Field(default=True, description="Require admin credentials")
    username: str = Field(default="admin@example.com", description="Admin username")
    password: str = Field(default="change-me", description="Admin password")


class MediaFolders(BaseModel):
    """Destination folders on the image host, per dashboard section."""

    products: str = "dev-admin/products"
    product_main: str = "dev-admin/products/main"
    product_gallery: str = "dev-admin/products/gallery"
    gifts: str = "dev-admin/gifts"
    banners: str = "dev-admin/banners"
    blogs: str = "dev-admin/blogs"
    podcasts: str = "dev-admin/podcasts"
    testimonials: str = "dev-admin/testimonials"

    def for_section(self, section: str | None = None) -> str:
        """Folder for a dashboard section; products when none is given.

        Raises:
            ValueError: If ``section`` is not one of the configured folders
        """
        if section is None:
            return self.products
        if section not in type(self).model_fields:
            raise ValueError(f"Unknown upload section: {section}")
        return getattr(self, section)


class MediaConfig(BaseModel):
    """Image/video host configuration (unsigned uploads)."""

    cloud_name: str = Field(default="demo", description="Cloud name on the image host")
    upload_preset: str = Field(
        default="unsigned_preset", description="Unsigned upload preset"
    )
    api_base_url: str = Field(
        default="https://api.cloudinary.com/v1_1",
        description="Base URL of the upload API",
    )
    delivery_base_url: str = Field(
        default="https://res.cloudinary.com",
        description="Base URL used to build delivery URLs",
    )
    folders: MediaFolders = Field(default_factory=MediaFolders)
    timeout_seconds: float = Field(default=60.0, description="Upload request timeout")
    allowed_image_types: list[str] = Field(
        default_factory=lambda: [
            "image/jpeg",
            "image/jpg",
            "image/png",
            "image/gif",
            "image/webp",
        ]
    )
    max_image_bytes: int = Field(default=50 * _MB, description="Absolute image size limit")
    warn_image_bytes: int = Field(
        default=10 * _MB, description="Images above this size get a compression warning"
    )
    max_video_bytes: int = Field(default=100 * _MB, description="Video size limit")
    max_gallery_images: int = Field(default=5, description="Maximum gallery images per item")

    @computed_field
    @property
    def image_upload_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.cloud_name}/image/upload"

    @computed_field
    @property
    def video_upload_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.cloud_name}/video/upload"


class SizeTier(BaseModel):
    """A value that applies to files strictly larger than ``min_bytes``."""

    min_bytes: int = Field(ge=0)
    value: float = Field(gt=0, le=1)


class CompressionConfig(BaseModel):
    """Tunable policy for shrinking oversized images before upload."""

    enabled: bool = Field(default=True, description="Compress oversized images")
    threshold_bytes: int = Field(
        default=5 * _MB, description="Images at or below this size are uploaded as-is"
    )
    target_bytes: int = Field(default=8 * _MB, description="Byte budget for the output")
    max_attempts: int = Field(default=8, ge=1, description="Maximum encode attempts")
    quality_step: float = Field(default=0.1, gt=0, le=1)
    min_quality: float = Field(
        default=0.1, gt=0, le=1, description="Retries stop once quality reaches this"
    )
    scale_tiers: list[SizeTier] = Field(
        default_factory=lambda: [
            SizeTier(min_bytes=20 * _MB, value=0.3),
            SizeTier(min_bytes=15 * _MB, value=0.4),
            SizeTier(min_bytes=10 * _MB, value=0.5),
        ],
        description="Maximum dimension scale per size bracket",
    )
    default_scale_cap: float = Field(default=0.7, gt=0, le=1)
    quality_tiers: list[SizeTier] = Field(
        default_factory=lambda: [
            SizeTier(min_bytes=15 * _MB, value=0.3),
            SizeTier(min_bytes=10 * _MB, value=0.4),
            SizeTier(min_bytes=8 * _MB, value=0.5),
        ],
        description="Starting JPEG quality per size bracket",
    )
    default_quality: float = Field(default=0.6, gt=0, le=1)

    @field_validator("scale_tiers", "quality_tiers")
    @classmethod
    def _largest_bracket_first(cls, tiers: list[SizeTier]) -> list[SizeTier]:
        # First matching tier wins
        return sorted(tiers, key=lambda t: t.min_bytes, reverse=True)


class ListingConfig(BaseModel):
    """Pagination defaults for list endpoints."""

    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    api_prefix: str = Field(default="/api/v1", description="Prefix for admin routes")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    admin: AdminConfig = Field(
        default_factory=AdminConfig, description="Admin credential configuration"
    )
    media: MediaConfig = Field(
        default_factory=MediaConfig, description="Image host configuration"
    )
    compression: CompressionConfig = Field(
        default_factory=CompressionConfig, description="Image compression policy"
    )
    listing: ListingConfig = Field(
        default_factory=ListingConfig, description="Pagination defaults"
    )
