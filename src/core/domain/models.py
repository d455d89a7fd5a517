"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los alias reproducen el contrato JSON del servicio idgen (`RequestInfo`,
  `idRequests`, `idResponses`...), mientras que en Python usamos snake_case.

Nota:
- Estos modelos describen *qué* viaja por la red, no *cómo* se envía.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RequestInfo(BaseModel):
    """Contexto opaco de la petición (trazas, auth, usuario).

    El cliente no lo inspecciona: se reenvía tal cual. Solo se serializan los
    campos que el llamador fijó, incluidos los desconocidos (`extra="allow"`).
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    api_id: str | None = Field(default=None, alias="apiId")
    ver: str | None = None
    ts: int | None = None
    action: str | None = None
    did: str | None = None
    key: str | None = None
    msg_id: str | None = Field(default=None, alias="msgId")
    auth_token: str | None = Field(default=None, alias="authToken")
    user_info: dict[str, Any] | None = Field(default=None, alias="userInfo")


class IdRequest(BaseModel):
    """Una unidad de petición: qué secuencia, con qué formato y para qué tenant."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id_name: str = Field(..., alias="idName", description="Nombre lógico de la secuencia.")
    format: str = Field(..., description="Plantilla de formato, interpretada solo por el servicio.")
    tenant_id: str = Field(..., alias="tenantId", description="Tenant/partición del id.")


class IdGenerationRequest(BaseModel):
    """Petición por lotes: un contexto + N `IdRequest` (N == count)."""

    model_config = ConfigDict(populate_by_name=True)

    request_info: RequestInfo | dict[str, Any] | None = Field(
        default_factory=dict,
        alias="RequestInfo",
        description="Contexto opaco reenviado al servicio (puede ser null).",
    )
    id_requests: list[IdRequest] = Field(
        default_factory=list,
        alias="idRequests",
        description="Items de la petición; el orden se preserva.",
    )

    def to_wire(self) -> dict[str, Any]:
        """Cuerpo JSON tal como lo espera el servicio."""

        if isinstance(self.request_info, RequestInfo):
            context: Any = self.request_info.model_dump(mode="json", by_alias=True, exclude_unset=True)
        else:
            context = self.request_info
        return {
            "RequestInfo": context,
            "idRequests": [item.model_dump(mode="json", by_alias=True) for item in self.id_requests],
        }


class IdResponse(BaseModel):
    """Un id generado, con el `idName`/`format` que el servicio haya devuelto."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., description="Identificador generado.")
    id_name: str | None = Field(default=None, alias="idName")
    format: str | None = None


class IdGenerationResponse(BaseModel):
    """Respuesta por lotes: un `IdResponse` por item pedido, en orden."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    response_info: dict[str, Any] | None = Field(default=None, alias="ResponseInfo")
    id_responses: list[IdResponse] = Field(
        default_factory=list,
        alias="idResponses",
        description="Ids generados, en el orden devuelto por el servicio.",
    )

    @property
    def ids(self) -> list[str]:
        return [item.id for item in self.id_responses]
