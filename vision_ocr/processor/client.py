from __future__ import annotations

from typing import Any

import httpx

from vision_ocr.dto.annotate_request import build_annotate_request
from vision_ocr.processor.image_encoder import EncodedImage
from vision_ocr.processor.response import Response
from vision_ocr.settings import Settings, settings
from vision_ocr.utils.errors import SchemaError, ServiceError, TransportError
from vision_ocr.utils.utils import get_client_info, setup_logging


class Client:
    """Client for the Google Cloud Vision ``images:annotate`` endpoint.

    Every call sends one image with the DOCUMENT_TEXT_DETECTION feature and
    returns a :class:`Response`. Nothing is retried or cached.
    """

    def __init__(
        self,
        credential: str,
        endpoint: str | None = None,
        timeout: float | None = None,
        language_hints: list[str] | None = None,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
        log_level: int | None = None,
    ) -> None:
        self.log = setup_logging(component_name="vision_ocr.client",
                                 log_level=log_level if log_level is not None else settings.LOG_LEVEL)
        self.credential = credential
        self.endpoint = endpoint or settings.ENDPOINT
        self.timeout = timeout if timeout is not None else settings.TIMEOUT
        self.language_hints = list(language_hints) if language_hints is not None else settings.LANGUAGE_HINTS
        # test hook; None lets httpx pick its default network transport
        self._transport = transport

    @classmethod
    def from_env(cls) -> Client | None:
        """Build a client from ``VISION_OCR_API_KEY`` (or ``GCV_API_KEY``).

        The token is usually produced with::

            export GOOGLE_APPLICATION_CREDENTIALS=/path/to/key.json
            export GCV_API_KEY=`gcloud auth application-default print-access-token`

        Returns:
            Client | None: None when no credential is set.
        """
        env_settings = Settings()  # type: ignore[call-arg]
        if env_settings.API_KEY is None:
            return None
        return cls(
            env_settings.API_KEY,
            endpoint=env_settings.ENDPOINT,
            timeout=env_settings.TIMEOUT,
            language_hints=env_settings.LANGUAGE_HINTS,
            log_level=env_settings.LOG_LEVEL,
        )

    def info(self) -> dict[str, str]:
        return get_client_info(settings.VISION_OCR_VERSION, self.endpoint)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.credential}",
            "Content-Type": "application/json",
        }

    def _build_body(self, image: EncodedImage) -> dict[str, Any]:
        body = build_annotate_request(image, language_hints=self.language_hints)
        self.log.debug("annotate request: %s base64 chars, language hints %s", len(image), self.language_hints)
        return body

    def _to_response(self, http_response: httpx.Response) -> Response:
        self.log.debug("annotate response: HTTP %s, %s bytes", http_response.status_code, len(http_response.content))
        try:
            payload = http_response.json()
        except ValueError as exc:
            # JSONDecodeError, or UnicodeDecodeError for a body that is not valid text
            if http_response.is_error:
                raise TransportError(f"HTTP {http_response.status_code} from {self.endpoint}") from exc
            raise SchemaError("response body is not JSON") from exc

        if http_response.is_error:
            # an HTTP error status normally carries the service error object
            if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
                raise ServiceError(payload["error"])
            raise TransportError(f"HTTP {http_response.status_code} from {self.endpoint} without error object")
        return Response.from_payload(payload)

    def request(self, image: EncodedImage) -> Response:
        """Annotate ``image`` with a blocking HTTP call.

        Raises:
            TransportError: the HTTP exchange failed.
            ServiceError: the service replied with an error object.
            SchemaError: the reply is not a JSON object.
        """
        body = self._build_body(image)
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as http_client:  # type: ignore[arg-type]
                http_response = http_client.post(self.endpoint, headers=self._headers(), json=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"request to {self.endpoint} failed: {exc}") from exc
        return self._to_response(http_response)

    async def arequest(self, image: EncodedImage) -> Response:
        """Async twin of :meth:`request`."""
        body = self._build_body(image)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as http_client:  # type: ignore[arg-type]
                http_response = await http_client.post(self.endpoint, headers=self._headers(), json=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"request to {self.endpoint} failed: {exc}") from exc
        return self._to_response(http_response)
