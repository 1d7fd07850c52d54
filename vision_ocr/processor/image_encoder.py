from __future__ import annotations

import base64
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from vision_ocr.utils.errors import EncodeError


class EncodedImage:
    """PNG image carried as base64 text, ready for the request ``content`` field."""

    __slots__ = ("_content",)

    def __init__(self, content: str) -> None:
        self._content = content

    @property
    def content(self) -> str:
        return self._content

    def __len__(self) -> int:
        return len(self._content)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, EncodedImage) and other._content == self._content

    def __hash__(self) -> int:
        return hash(self._content)

    def __repr__(self) -> str:
        return f"EncodedImage(<{len(self._content)} base64 chars>)"

    @classmethod
    def from_image(cls, image: Image.Image) -> EncodedImage:
        """Losslessly compress an open Pillow image to PNG.

        Raises:
            EncodeError: Pillow cannot write the image as PNG (e.g. an unsupported mode).
        """
        buffer = BytesIO()
        try:
            image.save(buffer, format="PNG")
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"could not encode {image.mode} image of size {image.size} as PNG") from exc
        return cls(base64.b64encode(buffer.getvalue()).decode("ascii"))

    @classmethod
    def from_pixels(cls, data: bytes, width: int, height: int, mode: str = "RGB") -> EncodedImage:
        """Build an image from raw pixel bytes in the given Pillow color mode and encode it.

        Raises:
            EncodeError: the buffer does not match ``width`` x ``height`` in ``mode``,
                or the mode is unknown.
        """
        try:
            image = Image.frombytes(mode, (width, height), data)
        except (ValueError, TypeError) as exc:
            raise EncodeError(f"invalid {mode} pixel buffer for {width}x{height}: {exc}") from exc
        return cls.from_image(image)

    @classmethod
    def from_bytes(cls, stream: bytes) -> EncodedImage:
        """Decode an image file held in memory (any format Pillow reads) and re-encode it as PNG."""
        try:
            with Image.open(BytesIO(stream)) as imgf:
                imgf.load()
                return cls.from_image(imgf)
        except (UnidentifiedImageError, OSError) as exc:
            raise EncodeError("stream is not a readable image") from exc
