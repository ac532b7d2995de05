"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.api_model import ApiModel


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, list):
        return f"{len(value)} item(s)"
    if isinstance(value, dict):
        return str(value.get("name") or value) if value else "-"
    return str(value)


def build_model_panel(model: ApiModel) -> Panel:
    """Panel clave/valor con todos los campos de un modelo."""

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in model.model_dump(mode="json").items():
        table.add_row(key, _format_value(value))

    title = Text(f"{model.resource_name} #{model.id}", style="bold cyan")
    return Panel(table, title=title, border_style="cyan")


def build_results_table(resource_name: str, models: Sequence[ApiModel]) -> Table:
    """Tabla resumen: id, nombre y los `summary_fields` del recurso."""

    summary_fields: tuple[str, ...] = ()
    if models:
        summary_fields = getattr(type(models[0]), "summary_fields", ())

    table = Table(title=f"{resource_name} ({len(models)})")
    table.add_column("ID", style="magenta", no_wrap=True)
    table.add_column("Name", style="bright_green")
    for field in summary_fields:
        table.add_column(field.replace("_", " ").title(), style="white")

    for model in models:
        row = [str(model.id), str(getattr(model, "name", ""))]
        row.extend(_format_value(getattr(model, field, None)) for field in summary_fields)
        table.add_row(*row)
    return table
