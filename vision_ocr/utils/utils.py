"""Utility helpers for the vision OCR client.

This module centralizes shared behaviors across the dto and processor layers:
logging setup, client information, and walking the untyped JSON payload the
service returns before it is projected into typed models.
"""

import logging
import sys
from collections.abc import Sequence
from typing import Any

from vision_ocr.utils.errors import SchemaError

PathItem = str | int


def get_client_info(version: str, endpoint: str) -> dict[str, str]:
    """Return general information about the client.

    Args:
        version: Client version string.
        endpoint: Service URI the client posts to.

    Returns:
        dict: Client information (name, version, endpoint, feature).
    """
    return {"client_name": "vision-ocr",
            "client_version": version,
            "service_endpoint": endpoint,
            "feature": "DOCUMENT_TEXT_DETECTION"}


def format_path(path: Sequence[PathItem]) -> str:
    """Render a payload path the way it reads in JSON, e.g. ``responses[0].textAnnotations``."""
    rendered = ""
    for item in path:
        if isinstance(item, int):
            rendered += f"[{item}]"
        else:
            rendered += f".{item}" if rendered else item
    return rendered


def navigate(payload: Any, path: Sequence[PathItem]) -> Any:
    """Walk an opaque JSON value along a fixed path of keys and list indexes.

    Args:
        payload: Decoded JSON value (dicts, lists and scalars).
        path: Keys (str) for objects and indexes (int) for arrays.

    Returns:
        Any: The value found at the end of the path, still untyped.

    Raises:
        SchemaError: A key is missing, an index is out of range, or a step
            lands on a value of the wrong container type.
    """
    current = payload
    for depth, item in enumerate(path):
        walked = format_path(path[:depth + 1])
        if isinstance(item, int):
            if not isinstance(current, list):
                raise SchemaError(f"{walked}: expected array, got {type(current).__name__}", path=walked)
            if item >= len(current) or item < -len(current):
                raise SchemaError(f"{walked}: index out of range", path=walked)
            current = current[item]
        else:
            if not isinstance(current, dict):
                raise SchemaError(f"{walked}: expected object, got {type(current).__name__}", path=walked)
            if item not in current:
                raise SchemaError(f"{walked}: missing", path=walked)
            current = current[item]
    return current


def setup_logging(component_name: str = "vision_ocr", log_level: int = 30) -> logging.Logger:
    """Configure a logger that writes to stdout with a consistent format.

    Args:
        component_name: Logger name to configure.
        log_level: Logging level to set on the logger and handler.

    Returns:
        logging.Logger: Configured logger instance.
    """
    root_logger = logging.getLogger(component_name)
    log_format = '[%(asctime)s] [%(levelname)s] %(name)s: %(message)s'
    log_handler = logging.StreamHandler(sys.stdout)
    log_handler.setFormatter(logging.Formatter(fmt=log_format))
    log_handler.setLevel(level=log_level)
    root_logger.setLevel(level=log_level)
    root_logger.propagate = False

    # only add the handler if a previous one does not exists
    handler_exists = False
    for h in root_logger.handlers:
        if isinstance(h, logging.StreamHandler) and h.level == log_handler.level:
            handler_exists = True
            break

    if not handler_exists:
        root_logger.addHandler(log_handler)

    return root_logger
