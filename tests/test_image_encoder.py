import asyncio
import base64

import pytest

from craft_price_advisor.errors import ImageEncodingError
from craft_price_advisor.image_encoder import encode_image, has_image


class FakeUpload:
    def __init__(self, data: bytes = b"", *, filename: str | None = "photo.png", content_type: str | None = "image/png", fail: bool = False) -> None:
        self.filename = filename
        self.content_type = content_type
        self._data = data
        self._fail = fail

    async def read(self, size: int = -1) -> bytes:
        if self._fail:
            raise OSError("disk went away")
        return self._data


def test_encode_image_returns_full_base64_payload():
    data = bytes(range(256)) * 4
    payload = asyncio.run(encode_image(FakeUpload(data)))

    assert payload.mime_type == "image/png"
    assert base64.b64decode(payload.data) == data


def test_mime_type_falls_back_to_filename_then_octet_stream():
    guessed = asyncio.run(encode_image(FakeUpload(b"x", filename="scarf.jpg", content_type=None)))
    unknown = asyncio.run(encode_image(FakeUpload(b"x", filename="scarf", content_type=None)))

    assert guessed.mime_type == "image/jpeg"
    assert unknown.mime_type == "application/octet-stream"


def test_read_failure_raises_encoding_error():
    with pytest.raises(ImageEncodingError) as excinfo:
        asyncio.run(encode_image(FakeUpload(fail=True)))
    assert isinstance(excinfo.value.__cause__, OSError)


def test_has_image_ignores_unnamed_uploads():
    assert has_image(FakeUpload(b"x"))
    assert not has_image(FakeUpload(b"", filename=""))
    assert not has_image(None)
