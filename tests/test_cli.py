"""Tests for the idgen CLI."""

import json

import httpx
import pytest
from typer.testing import CliRunner

from adapters.http_client import build_client
from adapters.idgen_transport import HttpxIdGenTransport
from cli import main as cli_main

from conftest import idgen_payload

runner = CliRunner()


@pytest.fixture
def serve(monkeypatch):
    """Route the CLI's transport to a MockTransport handler; returns the seen requests."""
    seen: list[httpx.Request] = []

    def install(handler):
        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        def factory(settings=None):
            return HttpxIdGenTransport(client=build_client(settings, transport=httpx.MockTransport(recording)))

        monkeypatch.setattr(cli_main, "HttpxIdGenTransport", factory)
        return seen

    return install


class TestGenerate:
    """Tests for `idgen generate`."""

    def test_prints_ids(self, serve, monkeypatch) -> None:
        """Test that generated ids are shown in a table."""
        monkeypatch.setenv("IDGEN_HOST", "http://idgen.cli")
        seen = serve(lambda request: httpx.Response(200, json=idgen_payload(["CHB-0001", "CHB-0002"])))

        result = runner.invoke(
            cli_main.app,
            ["generate", "--tenant", "pb.amritsar", "--name", "chb.booking", "--format", "CHB-[SEQ]", "--count", "2"],
        )

        assert result.exit_code == 0, result.output
        assert "CHB-0001" in result.output
        assert "CHB-0002" in result.output
        assert str(seen[0].url).startswith("http://idgen.cli/")
        body = json.loads(seen[0].content)
        assert len(body["idRequests"]) == 2
        assert body["RequestInfo"]["apiId"] == "idgen-cli"

    def test_json_output_and_file(self, serve, tmp_path) -> None:
        """Test --json printing and --output export."""
        serve(lambda request: httpx.Response(200, json=idgen_payload(["A-1"])))
        out = tmp_path / "out" / "ids.json"

        result = runner.invoke(
            cli_main.app,
            ["generate", "-t", "pb", "-n", "a", "-f", "A-[SEQ]", "--json", "--output", str(out)],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["idResponses"][0]["id"] == "A-1"
        assert json.loads(out.read_text(encoding="utf-8"))["idResponses"][0]["id"] == "A-1"

    def test_host_and_path_override(self, serve) -> None:
        """Test that --host/--path win over settings."""
        seen = serve(lambda request: httpx.Response(200, json=idgen_payload(["X"])))
        result = runner.invoke(
            cli_main.app,
            ["generate", "-t", "pb", "-n", "x", "-f", "X", "--host", "http://other", "--path", "/ids"],
        )
        assert result.exit_code == 0, result.output
        assert str(seen[0].url) == "http://other/ids"

    def test_default_tenant(self, serve, monkeypatch) -> None:
        """Test that IDGEN_DEFAULT_TENANT_ID is used when --tenant is absent."""
        monkeypatch.setenv("IDGEN_DEFAULT_TENANT_ID", "pb.default")
        seen = serve(lambda request: httpx.Response(200, json=idgen_payload(["X"])))
        result = runner.invoke(cli_main.app, ["generate", "-n", "x", "-f", "X"])
        assert result.exit_code == 0, result.output
        assert json.loads(seen[0].content)["idRequests"][0]["tenantId"] == "pb.default"

    def test_missing_tenant(self, serve) -> None:
        """Test that no tenant at all is a usage error."""
        seen = serve(lambda request: httpx.Response(200, json=idgen_payload([])))
        result = runner.invoke(cli_main.app, ["generate", "-n", "x", "-f", "X"])
        assert result.exit_code != 0
        assert seen == []

    def test_rejected_exits_1(self, serve) -> None:
        """Test that a 4xx is shown with its body and exits 1."""
        serve(lambda request: httpx.Response(400, text="invalid tenant"))
        result = runner.invoke(cli_main.app, ["generate", "-t", "pb", "-n", "x", "-f", "X"])
        assert result.exit_code == 1
        assert "invalid tenant" in result.output

    def test_transport_failure_exits_1(self, serve) -> None:
        """Test that a connect error is shown with its cause name and exits 1."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        serve(handler)
        result = runner.invoke(cli_main.app, ["generate", "-t", "pb", "-n", "x", "-f", "X"])
        assert result.exit_code == 1
        assert "ConnectError" in result.output


    def test_logging_only_configured_with_verbose(self, serve, monkeypatch) -> None:
        """Test that log handlers are installed only for --verbose."""
        calls: list[dict] = []
        monkeypatch.setattr(cli_main.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        serve(lambda request: httpx.Response(400, text="invalid tenant"))

        result = runner.invoke(cli_main.app, ["generate", "-t", "pb", "-n", "x", "-f", "X"])
        assert result.exit_code == 1
        assert calls == []

        result = runner.invoke(cli_main.app, ["generate", "-t", "pb", "-n", "x", "-f", "X", "--verbose"])
        assert result.exit_code == 1
        assert len(calls) == 1
        assert calls[0]["level"] == cli_main.logging.DEBUG

class TestDoctor:
    """Tests for `idgen doctor`."""

    def test_configure_writes_user_env(self, tmp_path) -> None:
        """Test that configure stores answers in the user .env."""
        result = runner.invoke(
            cli_main.app,
            ["doctor", "configure"],
            input="http://idgen.prod\n/egov-idgen/id/_generate\npb.amritsar\n",
        )
        assert result.exit_code == 0, result.output
        env_file = tmp_path / "xdg" / "idgen-client" / ".env"
        text = env_file.read_text(encoding="utf-8")
        assert "IDGEN_HOST=http://idgen.prod" in text
        assert "IDGEN_DEFAULT_TENANT_ID=pb.amritsar" in text
