"""Typed access to a raw ``images:annotate`` reply.

Decoding is two stages: :func:`vision_ocr.utils.utils.navigate` walks the
untyped JSON to a subtree, then :func:`decode` validates that subtree into a
model. Both raise :class:`SchemaError` so a malformed reply never escapes as a
pydantic or lookup error.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from vision_ocr.dto.full_text_annotation import FullTextAnnotation
from vision_ocr.dto.text_annotation import TextAnnotation
from vision_ocr.utils.errors import SchemaError, ServiceError
from vision_ocr.utils.utils import PathItem, format_path, navigate

ModelT = TypeVar("ModelT", bound=BaseModel)

TEXT_ANNOTATIONS_PATH: tuple[PathItem, ...] = ("responses", 0, "textAnnotations")
FULL_TEXT_ANNOTATION_PATH: tuple[PathItem, ...] = ("responses", 0, "fullTextAnnotation")


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = format_path(first["loc"]) or "<root>"
    return f"{location}: {first['msg']} ({exc.error_count()} error(s))"


def decode(model: type[ModelT], value: Any, path: str | None = None) -> ModelT:
    """Validate an untyped subtree into ``model``.

    Raises:
        SchemaError: the subtree does not match the model's shape.
    """
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        where = path or model.__name__
        raise SchemaError(f"{where} does not match {model.__name__}: {_describe(exc)}", path=path) from exc


class Response:
    """A service reply whose error members have already been checked.

    Build it with :meth:`from_payload`. The accessors re-read the payload on
    every call; nothing is parsed up front or cached.
    """

    __slots__ = ("_payload",)

    def __init__(self, payload: dict[str, Any]) -> None:
        self._payload = payload

    @classmethod
    def from_payload(cls, payload: Any) -> Response:
        """Wrap a decoded reply, raising for the service's error objects.

        Raises:
            SchemaError: the reply is not a JSON object.
            ServiceError: the reply, or its first per-image response, holds an ``error`` object.
        """
        if not isinstance(payload, dict):
            raise SchemaError(f"response must be object, got {type(payload).__name__}")

        error = payload.get("error")
        if isinstance(error, dict):
            raise ServiceError(error)

        responses = payload.get("responses")
        if isinstance(responses, list) and responses and isinstance(responses[0], dict):
            image_error = responses[0].get("error")
            if isinstance(image_error, dict):
                raise ServiceError(image_error)

        return cls(payload)

    @property
    def payload(self) -> dict[str, Any]:
        return self._payload

    def text_annotations(self) -> list[TextAnnotation]:
        """Decode ``responses[0].textAnnotations``.

        The first element is the whole-image annotation, as returned by the
        service. A single element that fails to decode fails the whole call.

        Raises:
            SchemaError: the path is absent or not an array, or an element is malformed.
        """
        try:
            raw = navigate(self._payload, TEXT_ANNOTATIONS_PATH)
        except SchemaError as exc:
            raise SchemaError("text_annotations must be array", path=exc.path) from exc
        if not isinstance(raw, list):
            raise SchemaError("text_annotations must be array", path=format_path(TEXT_ANNOTATIONS_PATH))

        annotations: list[TextAnnotation] = []
        for index, item in enumerate(raw):
            element_path = format_path((*TEXT_ANNOTATIONS_PATH, index))
            annotations.append(decode(TextAnnotation, item, path=element_path))
        return annotations

    def full_text_annotation(self) -> FullTextAnnotation:
        """Decode the whole ``responses[0].fullTextAnnotation`` tree in one pass.

        Raises:
            SchemaError: the path is absent or any node in the tree is malformed.
        """
        raw = navigate(self._payload, FULL_TEXT_ANNOTATION_PATH)
        return decode(FullTextAnnotation, raw, path=format_path(FULL_TEXT_ANNOTATION_PATH))
