"""Image encoding helpers shared by the generator adapters.

Input images arrive as raw bytes (:class:`~herobg.core.settings.ImageBlob`)
and must become validated ``(media type, bytes)`` pairs before they can be
placed in a request.  Generated images travel the other way: the adapter
combines the media type and payload into a single self-contained
``data:`` URI that any browser can display.

Every input is opened with Pillow before it is sent so that corrupt or
non-image uploads fail here, with an :class:`EncodingError`, rather than
as an opaque API error after the request has been made.

Encoding is independent per image, so :func:`encode_images` runs the work
on a small thread pool.  Results keep the input order.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from herobg.core.errors import EncodingError
from herobg.core.settings import ImageBlob

logger = logging.getLogger(__name__)

_DATA_URI_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


@dataclass(frozen=True)
class EncodedImage:
    """A validated image ready to be sent: detected media type plus bytes."""

    mime_type: str
    raw: bytes

    @property
    def data(self) -> str:
        return base64.b64encode(self.raw).decode("ascii")

    @property
    def data_uri(self) -> str:
        return to_data_uri(self.mime_type, self.raw)


def detect_mime_type(data: bytes) -> str:
    """Identify an image's media type from its contents.

    Args:
        data: Encoded image bytes.

    Returns:
        The media type reported by Pillow (e.g. ``"image/png"``).

    Raises:
        EncodingError: If the bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            image_format = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise EncodingError(f"Unreadable image data: {e}") from e

    mime_type = Image.MIME.get(image_format or "")
    if not mime_type:
        raise EncodingError(f"Unsupported image format: {image_format}")
    return mime_type


def encode_image(blob: ImageBlob) -> EncodedImage:
    """Validate an input image and encode it for transmission.

    The media type sent is always the one detected from the bytes.  A
    declared ``mime_type`` that disagrees (a generic
    ``application/octet-stream`` header, or the wrong image type) is
    replaced.

    Raises:
        EncodingError: If the blob is empty or not a readable image.
    """
    if not blob.data:
        raise EncodingError(f"Image {blob.label()} is empty")

    try:
        detected = detect_mime_type(blob.data)
    except EncodingError as e:
        raise EncodingError(f"Image {blob.label()} could not be read: {e}") from e

    if blob.mime_type and blob.mime_type != detected:
        logger.debug(f"Image {blob.label()} declared {blob.mime_type}, detected {detected}")
    return EncodedImage(mime_type=detected, raw=blob.data)


def encode_images(blobs: Sequence[ImageBlob], max_workers: int = 4) -> list[EncodedImage]:
    """Encode several images concurrently, preserving their order.

    The first failure is re-raised once all submitted work has finished.
    """
    if not blobs:
        return []
    if len(blobs) == 1:
        return [encode_image(blobs[0])]

    with ThreadPoolExecutor(max_workers=min(max_workers, len(blobs))) as executor:
        encoded = list(executor.map(encode_image, blobs))

    logger.debug(f"Encoded {len(encoded)} images")
    return encoded


def decode_data_uri(uri: str) -> tuple[bytes, str]:
    """Split a base64 ``data:`` URI into raw bytes and its media type.

    Args:
        uri: A reference such as ``data:image/png;base64,iVBORw0...``.

    Returns:
        Tuple of ``(raw bytes, media type)``.

    Raises:
        EncodingError: If the reference is not a base64 data URI or the
            payload is not valid base64.
    """
    if not uri.startswith(_DATA_URI_PREFIX) or _BASE64_MARKER not in uri:
        raise EncodingError("Image must be a base64 data URI")

    header, payload = uri[len(_DATA_URI_PREFIX) :].split(_BASE64_MARKER, 1)
    mime_type = header.split(";", 1)[0] or "application/octet-stream"

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Image payload is not valid base64: {e}") from e

    if not raw:
        raise EncodingError("Image payload is empty")
    return raw, mime_type


def encode_data_uri(uri: str, label: str = "base image") -> EncodedImage:
    """Decode a data URI and validate its payload like an uploaded image.

    The media type in the URI header is replaced by the detected one.

    Raises:
        EncodingError: If the URI is malformed or the payload is not a
            readable image.
    """
    raw, declared = decode_data_uri(uri)
    return encode_image(ImageBlob(data=raw, mime_type=declared, filename=label))


def to_data_uri(mime_type: str, payload: str | bytes) -> str:
    """Combine a media type and payload into a displayable data URI.

    ``payload`` may be raw bytes (they are base64-encoded) or an already
    base64-encoded string.
    """
    if isinstance(payload, bytes):
        payload = base64.b64encode(payload).decode("ascii")
    return f"{_DATA_URI_PREFIX}{mime_type}{_BASE64_MARKER}{payload}"
