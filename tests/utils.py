import io
import os
import re

import httpx
from PIL import Image

from src.oilpress_admin.entities.core._base import DocumentTable


def noise_image(width: int, height: int, mode: str = "RGB", fmt: str = "PNG") -> bytes:
    """Random-pixel image; noise barely compresses, so the byte size is predictable."""
    channels = len(mode)
    img = Image.frombytes(mode, (width, height), os.urandom(width * height * channels))
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def solid_image(width: int, height: int, color=(200, 120, 40), fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


_FILENAME = re.compile(rb'filename="([^"]+)"')
_FIELD = r'name="{name}"\r\n\r\n([^\r]*)\r\n'


def uploaded_filename(request: httpx.Request) -> str:
    match = _FILENAME.search(request.content)
    return match.group(1).decode() if match else ""


def form_field(request: httpx.Request, name: str) -> str | None:
    match = re.search(_FIELD.format(name=name).encode(), request.content)
    return match.group(1).decode() if match else None


def seed_documents(db_service, collection: str, *records: dict) -> None:
    """Store ``records`` exactly as given, bypassing model validation."""
    with db_service.session_scope() as session:
        for record in records:
            data = dict(record)
            row_id = data.pop("id", None)
            row = DocumentTable(collection=collection, data=data)
            if row_id:
                row.id = row_id
            session.add(row)
