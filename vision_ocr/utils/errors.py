from __future__ import annotations

import json
from typing import Any


class VisionOcrError(Exception):
    """Base class for every failure raised by the client."""


class EncodeError(VisionOcrError):
    """The image could not be serialized to the transport byte format."""


class TransportError(VisionOcrError):
    """The HTTP call to the service did not complete."""


class SchemaError(VisionOcrError):
    """A payload path is missing or its value has an unexpected shape."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ServiceError(VisionOcrError):
    """The service answered with a structured error object.

    The exception text is the JSON form of that object, unmodified.
    """

    def __init__(self, error: dict[str, Any]) -> None:
        super().__init__(json.dumps(error, ensure_ascii=False))
        self.error = error

    @property
    def code(self) -> int | None:
        return self.error.get("code")

    @property
    def status(self) -> str | None:
        return self.error.get("status")

    @property
    def message(self) -> str | None:
        return self.error.get("message")
