from dataclasses import dataclass, field
from pathlib import PurePath

_MB = 1024 * 1024


@dataclass(frozen=True)
class MediaFile:
    """An in-memory file on its way to the image host."""

    filename: str
    content_type: str
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def size_mb(self) -> float:
        return self.size / _MB

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    @property
    def is_video(self) -> bool:
        return self.content_type.startswith("video/")

    def as_jpeg(self, data: bytes) -> "MediaFile":
        """Copy of this file holding JPEG ``data`` under a ``.jpg`` name."""
        stem = PurePath(self.filename).stem or "image"
        return MediaFile(filename=f"{stem}.jpg", content_type="image/jpeg", data=data)
