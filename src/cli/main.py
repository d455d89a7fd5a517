"""Main CLI (Typer).

Commands:
- `generate`: request a batch of ids from idgen and show them.
- `doctor`: configuration and connectivity diagnostics.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.idgen_transport import HttpxIdGenTransport
from adapters.json_exporter import export_response_json
from cli import doctor
from cli.ui_components import build_error_panel, build_ids_table
from core.config import AppSettings
from core.domain.errors import ServiceRejected, TransportFailure
from core.domain.models import RequestInfo
from core.services.idgen_client import IdGenClient

app = typer.Typer(no_args_is_help=True, help="Client for the idgen identifier-generation service.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.command()
def generate(
    name: str = typer.Option(..., "--name", "-n", help="Logical id name (sequence), e.g. 'chb.booking'."),
    id_format: str = typer.Option(..., "--format", "-f", help="Id format template, e.g. 'CHB-[cy:yyyy-MM-dd]-[SEQ_CHB]'."),
    tenant: str | None = typer.Option(None, "--tenant", "-t", help="Tenant id (defaults to IDGEN_DEFAULT_TENANT_ID)."),
    count: int = typer.Option(1, "--count", "-c", min=0, help="How many ids to request."),
    host: str | None = typer.Option(None, "--host", help="Override IDGEN_HOST."),
    path: str | None = typer.Option(None, "--path", help="Override IDGEN_PATH."),
    auth_token: str | None = typer.Option(None, "--auth-token", help="authToken forwarded in RequestInfo."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response as JSON."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the response to a JSON file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Request a batch of ids from idgen."""

    _configure_logging(verbose)
    settings = AppSettings()
    if host:
        settings = settings.model_copy(update={"host": host})
    if path:
        settings = settings.model_copy(update={"path": path})

    tenant_id = tenant or settings.default_tenant_id
    if not tenant_id:
        raise typer.BadParameter("--tenant is required (or set IDGEN_DEFAULT_TENANT_ID)")

    context = RequestInfo(
        api_id="idgen-cli",
        ver="1.0",
        ts=int(time.time() * 1000),
        action="_generate",
        **({"auth_token": auth_token} if auth_token else {}),
    )

    with HttpxIdGenTransport(settings=settings) as transport:
        client = IdGenClient(settings.endpoint(), transport)
        result = client.request_ids(context, tenant_id, name, id_format, count)

    if isinstance(result, (ServiceRejected, TransportFailure)):
        _console.print(build_error_panel(result))
        raise typer.Exit(code=1)

    if output is not None:
        export_response_json(response=result, output_path=output)

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json", by_alias=True, exclude_none=True), ensure_ascii=False))
        return

    _console.print(build_ids_table(result, tenant_id=tenant_id))
    if output is not None:
        _console.print(f"[green]Saved response to:[/green] {output}")


def run() -> None:
    app()
