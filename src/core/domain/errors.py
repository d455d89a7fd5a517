"""Errores del cliente idgen.

Por qué una unión etiquetada:
- El llamador hace `match` sobre dos casos cerrados (`ServiceRejected` |
  `TransportFailure`) en vez de capturar clases de excepción de la capa HTTP.
- Cada caso lleva el diagnóstico crudo (body, o nombre de causa + mensaje).

Las excepciones de este módulo son el contrato con el transporte
(`RemoteClientError`) y la variante "raise" del cliente (`IdGenClientError`).
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

UNKNOWN_CAUSE = "unknown"


class ServiceRejected(BaseModel):
    """El servicio respondió con un 4xx; `body` es el texto crudo de la respuesta."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["service_rejected"] = "service_rejected"
    body: str = Field(..., description="Cuerpo de la respuesta sin parsear ni reformatear.")


class TransportFailure(BaseModel):
    """Cualquier otro fallo: red, timeout, 5xx, deserialización."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["transport_failure"] = "transport_failure"
    cause_name: str = Field(..., description="Nombre de la clase de la causa subyacente.")
    message: str = Field(..., description="Mensaje del fallo.")


ClientError = Annotated[Union[ServiceRejected, TransportFailure], Field(discriminator="kind")]


class RemoteClientError(Exception):
    """Lanzada por el transporte cuando la capa HTTP reporta un 4xx."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"idgen rejected the request with HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class IdGenTransportError(Exception):
    """Fallo del transporte por debajo de la semántica 4xx (se encadena la causa real)."""


class IdGenClientError(Exception):
    """Variante excepción de `ClientError`, para llamadores que prefieren `raise`."""

    def __init__(self, error: ServiceRejected | TransportFailure) -> None:
        if isinstance(error, ServiceRejected):
            text = f"idgen rejected the batch: {error.body}"
        else:
            text = f"idgen call failed ({error.cause_name}): {error.message}"
        super().__init__(text)
        self.error = error
