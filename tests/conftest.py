"""
Pytest configuration and shared fixtures.

Provides isolated settings, a recording fake transport, and helpers to build
idgen JSON responses.
"""

from typing import Any

import pytest

from core.config import AppSettings, IdGenEndpoint
from core.domain.models import IdGenerationRequest, IdGenerationResponse

IDGEN_HOST = "http://idgen.test"
IDGEN_PATH = "/egov-idgen/id/_generate"


def idgen_payload(ids: list[str], *, id_name: str = "chb.booking", id_format: str = "CHB-[SEQ_CHB]") -> dict[str, Any]:
    """Build a response body the way the idgen service returns it."""
    return {
        "ResponseInfo": {"apiId": "idgen", "status": "SUCCESSFUL"},
        "idResponses": [{"id": value, "idName": id_name, "format": id_format} for value in ids],
    }


class RecordingTransport:
    """Fake `IdGenTransport` that records calls and replays a result or an exception."""

    def __init__(self, response: IdGenerationResponse | None = None, exc: BaseException | None = None) -> None:
        self.response = response or IdGenerationResponse()
        self.exc = exc
        self.calls: list[tuple[str, IdGenerationRequest]] = []

    def post_batch(self, url: str, request: IdGenerationRequest) -> IdGenerationResponse:
        self.calls.append((url, request))
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep real env vars and .env files out of the tests."""
    for key in ("IDGEN_HOST", "IDGEN_PATH", "IDGEN_HTTP_TIMEOUT_SECONDS", "IDGEN_USER_AGENT", "IDGEN_DEFAULT_TENANT_ID"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, host=IDGEN_HOST, path=IDGEN_PATH, http_timeout_seconds=2.0)


@pytest.fixture
def endpoint() -> IdGenEndpoint:
    return IdGenEndpoint(host=IDGEN_HOST, path=IDGEN_PATH)
