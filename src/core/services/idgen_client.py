"""Client for the idgen identifier-generation service.

This module turns "I need N ids" into a single batched request and turns the
many ways a remote call can fail into two outcomes: `ServiceRejected` (the
service answered 4xx) and `TransportFailure` (everything else). It holds no
mutable state, so one instance can be shared across threads.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from core.config import IdGenEndpoint
from core.domain.errors import (
    UNKNOWN_CAUSE,
    ClientError,
    IdGenClientError,
    RemoteClientError,
    ServiceRejected,
    TransportFailure,
)
from core.domain.models import IdGenerationRequest, IdGenerationResponse, IdRequest, RequestInfo
from core.interfaces.transport import IdGenTransport

logger = logging.getLogger(__name__)


def build_batch_request(
    context: RequestInfo | Mapping[str, Any] | None,
    *,
    tenant_id: str,
    id_name: str,
    id_format: str,
    count: int,
) -> IdGenerationRequest:
    """Build one batch with `count` identical items.

    The service answers one id per item, matched by position, so repeating the
    same triple is what we want. A `None` context is forwarded as `null`.
    """

    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    item = IdRequest(id_name=id_name, format=id_format, tenant_id=tenant_id)
    if context is None or isinstance(context, RequestInfo):
        request_info = context
    else:
        request_info = dict(context)
    return IdGenerationRequest(request_info=request_info, id_requests=[item] * count)


def _cause_of(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def transport_failure_from(exc: BaseException) -> TransportFailure:
    """Map an arbitrary exception to `TransportFailure` without raising."""

    cause = _cause_of(exc)
    cause_name = type(cause).__name__ if cause is not None else UNKNOWN_CAUSE
    try:
        message = str(exc)
    except Exception:  # broken __str__ on third-party exceptions
        message = type(exc).__name__
    return TransportFailure(cause_name=cause_name, message=message)


class IdGenClient:
    """Requests batches of ids from the idgen service.

    Args:
        endpoint: already resolved host + path.
        transport: an `IdGenTransport` implementation (httpx in production).
    """

    def __init__(self, endpoint: IdGenEndpoint, transport: IdGenTransport) -> None:
        self._endpoint = endpoint
        self._transport = transport

    @property
    def endpoint(self) -> IdGenEndpoint:
        return self._endpoint

    def request_ids(
        self,
        context: RequestInfo | Mapping[str, Any] | None,
        tenant_id: str,
        id_name: str,
        id_format: str,
        count: int,
    ) -> IdGenerationResponse | ClientError:
        """Request `count` ids in one call.

        Returns the parsed response, or a `ServiceRejected` / `TransportFailure`
        value. Never returns a partial response and never retries.
        """

        request = build_batch_request(
            context,
            tenant_id=tenant_id,
            id_name=id_name,
            id_format=id_format,
            count=count,
        )
        url = self._endpoint.url
        logger.debug("idgen batch -> %s tenant=%s name=%s count=%d", url, tenant_id, id_name, count)

        try:
            return self._transport.post_batch(url, request)
        except RemoteClientError as exc:
            logger.warning("idgen rejected batch (HTTP %s): %s", exc.status_code, exc.body)
            return ServiceRejected(body=exc.body)
        except Exception as exc:
            failure = transport_failure_from(exc)
            logger.warning("idgen call failed (%s): %s", failure.cause_name, failure.message)
            return failure

    def request_ids_or_raise(
        self,
        context: RequestInfo | Mapping[str, Any] | None,
        tenant_id: str,
        id_name: str,
        id_format: str,
        count: int,
    ) -> IdGenerationResponse:
        result = self.request_ids(context, tenant_id, id_name, id_format, count)
        if isinstance(result, (ServiceRejected, TransportFailure)):
            raise IdGenClientError(result)
        return result

    def get_id_list(
        self,
        context: RequestInfo | Mapping[str, Any] | None,
        tenant_id: str,
        id_name: str,
        id_format: str,
        count: int,
    ) -> list[str]:
        """Return just the generated id strings, in response order."""

        response = self.request_ids_or_raise(context, tenant_id, id_name, id_format, count)
        ids = response.ids
        if count > 0 and not ids:
            raise IdGenClientError(
                TransportFailure(
                    cause_name="IdGenEmptyResponse",
                    message="No ids returned from idgen service",
                )
            )
        return ids
