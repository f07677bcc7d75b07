from __future__ import annotations

import base64
import logging
import mimetypes
from typing import Protocol

from .errors import ImageEncodingError
from .models.advice import ImagePayload

logger = logging.getLogger(__name__)

FALLBACK_MIME_TYPE = "application/octet-stream"


class ImageUpload(Protocol):
    """What the encoder needs from an uploaded file (Starlette's ``UploadFile`` fits)."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes:
        ...


def has_image(upload: ImageUpload | None) -> bool:
    # Browsers post an empty, unnamed part when no file was chosen.
    return upload is not None and bool(upload.filename)


async def encode_image(upload: ImageUpload) -> ImagePayload:
    """Read the whole upload and return it as a base64 payload.

    Raises:
        ImageEncodingError: the file could not be read.
    """
    try:
        contents = await upload.read()
    except Exception as exc:
        raise ImageEncodingError(f"Failed to read image {upload.filename!r}") from exc

    mime_type = _resolve_mime_type(upload)
    logger.debug(
        "Encoded item image",
        extra={"mime_type": mime_type, "size_bytes": len(contents)},
    )
    return ImagePayload(
        mime_type=mime_type,
        data=base64.b64encode(contents).decode("ascii"),
    )


def _resolve_mime_type(upload: ImageUpload) -> str:
    if upload.content_type:
        return upload.content_type
    if upload.filename:
        guessed, _ = mimetypes.guess_type(upload.filename)
        if guessed:
            return guessed
    return FALLBACK_MIME_TYPE


__all__ = ["ImageUpload", "encode_image", "has_image"]
