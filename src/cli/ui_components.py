"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import ServiceRejected, TransportFailure
from core.domain.models import IdGenerationResponse


def build_ids_table(response: IdGenerationResponse, *, tenant_id: str) -> Table:
    """Tabla Rich con los ids generados, en el orden recibido."""

    table = Table(title=f"Generated ids ({tenant_id})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Id", style="bold cyan")
    table.add_column("Name", style="white")
    table.add_column("Format", style="magenta")
    for index, item in enumerate(response.id_responses, start=1):
        table.add_row(str(index), item.id, item.id_name or "-", item.format or "-")
    return table


def build_error_panel(error: ServiceRejected | TransportFailure) -> Panel:
    """Panel rojo para un `ClientError`."""

    body = Text()
    if isinstance(error, ServiceRejected):
        title = Text("idgen rejected the request", style="bold red")
        body.append(error.body)
    else:
        title = Text("idgen call failed", style="bold red")
        body.append(f"{error.cause_name}\n", style="bold")
        body.append(error.message)
    return Panel(body, title=title, border_style="red")
