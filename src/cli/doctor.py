"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    """Probe the endpoint. Any HTTP answer (even 4xx/405) means it is reachable."""

    try:
        with build_client(settings) as client:
            response = client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, f"{type(exc).__name__}: {exc}"


@app.command()
def run() -> None:
    """Show the resolved configuration and check the idgen endpoint."""

    settings = AppSettings()
    endpoint = settings.endpoint()

    table = Table(title="idgen-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("idgen URL", "OK", endpoint.url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    if settings.default_tenant_id:
        table.add_row("Default tenant", "OK", settings.default_tenant_id)
    else:
        table.add_row("Default tenant", "OPTIONAL", "Not set -> pass --tenant to generate")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "MISSING", str(get_user_env_file()))

    ok_http, detail_http = _check_http(endpoint.url, settings)
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    host = typer.prompt("idgen host", default=settings.host, show_default=True).strip()
    path = typer.prompt("idgen path", default=settings.path, show_default=True).strip()
    tenant = typer.prompt(
        "Default tenant id (empty to skip)",
        default=settings.default_tenant_id or "",
        show_default=False,
    ).strip()

    if not host or not path:
        raise typer.BadParameter("host and path are required")

    env_path = write_user_env_vars(
        {
            "IDGEN_HOST": host,
            "IDGEN_PATH": path,
            "IDGEN_DEFAULT_TENANT_ID": tenant or None,
        }
    )

    _console.print(f"[green]Saved idgen config to:[/green] {env_path}")
