"""Image and response builders shared by the test modules."""

from __future__ import annotations

import base64
import io
from types import SimpleNamespace

from PIL import Image


def make_image_bytes(
    color: tuple[int, int, int] = (200, 40, 40),
    size: tuple[int, int] = (8, 8),
    image_format: str = "PNG",
) -> bytes:
    """Encode a small solid-colour image in memory."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=image_format)
    return buffer.getvalue()


def make_data_uri(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def make_response(*parts: SimpleNamespace) -> SimpleNamespace:
    """Build an object shaped like a ``generate_content`` response."""
    content = SimpleNamespace(parts=list(parts))
    return SimpleNamespace(candidates=[SimpleNamespace(content=content)])


def inline_part(data: bytes | str, mime_type: str = "image/png") -> SimpleNamespace:
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def text_part(text: str) -> SimpleNamespace:
    return SimpleNamespace(inline_data=None, text=text)
