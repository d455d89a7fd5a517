"""Transporte httpx hacia el servicio idgen.

Implementa `core.interfaces.transport.IdGenTransport`:
- 4xx -> `RemoteClientError` con el body crudo.
- Cuerpos no serializables, 5xx (con el body recortado), errores de red y
  respuestas ilegibles -> `IdGenTransportError`,
  encadenando la excepción original (`raise ... from exc`) para que el cliente
  pueda reportar el nombre de la causa.
"""

from __future__ import annotations

import json

import httpx
from pydantic import ValidationError

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.errors import IdGenTransportError, RemoteClientError
from core.domain.models import IdGenerationRequest, IdGenerationResponse

_MAX_BODY_CHARS = 2000


class HttpxIdGenTransport:
    """POST síncrono de un lote con `httpx.Client`."""

    def __init__(self, client: httpx.Client | None = None, settings: AppSettings | None = None) -> None:
        self._owns_client = client is None
        self._client = client or build_client(settings)

    def post_batch(self, url: str, request: IdGenerationRequest) -> IdGenerationResponse:
        try:
            content = json.dumps(request.to_wire())
        except (TypeError, ValueError) as exc:
            raise IdGenTransportError(f"could not serialize idgen request: {exc}") from exc

        try:
            response = self._client.post(url, content=content, headers={"Content-Type": "application/json"})
        except httpx.HTTPError as exc:
            raise IdGenTransportError(str(exc)) from exc

        if response.is_client_error:
            raise RemoteClientError(response.status_code, response.text)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise IdGenTransportError(
                f"idgen returned HTTP {response.status_code}: {response.text[:_MAX_BODY_CHARS]}"
            ) from exc

        try:
            return IdGenerationResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise IdGenTransportError(f"could not parse idgen response: {exc}") from exc

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxIdGenTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
