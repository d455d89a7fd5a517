"""Contrato del transporte hacia el servicio idgen.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite cambiar httpx por otro cliente, o por un fake en tests, sin tocar
  la lógica del cliente.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import IdGenerationRequest, IdGenerationResponse


@runtime_checkable
class IdGenTransport(Protocol):
    """Contrato mínimo para enviar un lote al servicio idgen.

    Reglas de diseño:
    - Una llamada == un round trip (nunca una por item).
    - Un 4xx se reporta lanzando `core.domain.errors.RemoteClientError`.
    - Cualquier otro fallo se lanza tal cual (idealmente encadenando la causa).
    """

    def post_batch(self, url: str, request: IdGenerationRequest) -> IdGenerationResponse:
        """Envía el lote a `url` y devuelve la respuesta deserializada."""

        ...
