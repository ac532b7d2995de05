"""CLI `rmapi` (Typer + Rich).

Comandos:
- `get`: un recurso por id.
- `many`: varios recursos por id en una sola petición.
- `search`: una página de resultados filtrados.
- `doctor`: diagnóstico y configuración (ver `cli/doctor.py`).
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

import pydantic
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_models_json, models_payload
from cli import doctor
from cli.ui_components import build_model_panel, build_results_table
from core.config import AppSettings
from core.domain.api_model import ApiModel
from core.domain.errors import RemoteError, ValidationError
from core.domain.models import resolve_resource
from core.services.resource_client import ResourceClient

app = typer.Typer(no_args_is_help=True, help="Query a paginated REST API of characters, locations and episodes.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Configura el logger raíz con `RichHandler` (solo desde la CLI)."""

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _build_client(settings: AppSettings) -> ResourceClient:
    return ResourceClient(settings)


def _resolve(resource: str) -> type[ApiModel]:
    try:
        return resolve_resource(resource)
    except KeyError as exc:
        raise typer.BadParameter(exc.args[0], param_hint="RESOURCE") from exc


def _parse_filters(raw: Sequence[str]) -> dict[str, str]:
    filters: dict[str, str] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected key=value, got '{item}'", param_hint="--filter")
        filters[key.strip()] = value.strip()
    return filters


@contextmanager
def _handle_errors() -> Iterator[None]:
    try:
        yield
    except ValidationError as exc:
        _err_console.print(f"[red]Invalid request:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    except RemoteError as exc:
        _err_console.print(f"[red]Remote error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _emit(resource_name: str, models: list[ApiModel], *, as_json: bool, output: Path | None) -> None:
    if output is not None:
        path = export_models_json(models=models, output_path=output)
        _err_console.print(f"[green]Saved {len(models)} result(s) to:[/green] {path}")
    if as_json:
        _console.print_json(data=models_payload(models))
    elif len(models) == 1:
        _console.print(build_model_panel(models[0]))
    else:
        _console.print(build_results_table(resource_name, models))


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every HTTP request (DEBUG)."),
) -> None:
    try:
        settings = AppSettings()
    except pydantic.ValidationError as exc:
        _err_console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    ctx.obj = settings
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def get(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="character, location or episode."),
    identifier: int = typer.Argument(..., help="Resource id."),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print raw JSON."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also export results to a JSON file."),
) -> None:
    """Fetch a single resource by id."""

    resource_cls = _resolve(resource)
    with _handle_errors(), _build_client(ctx.obj) as client:
        model = client.fetch(resource_cls, identifier)
    _emit(resource_cls.resource_name, [model], as_json=as_json, output=output)


@app.command()
def many(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="character, location or episode."),
    identifiers: list[int] = typer.Argument(..., help="Resource ids."),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print raw JSON."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also export results to a JSON file."),
) -> None:
    """Fetch several resources in a single request."""

    resource_cls = _resolve(resource)
    with _handle_errors(), _build_client(ctx.obj) as client:
        models = client.fetch_many(resource_cls, identifiers)
    _emit(resource_cls.resource_name, models, as_json=as_json, output=output)


@app.command()
def search(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="character, location or episode."),
    filters: list[str] | None = typer.Option(None, "--filter", "-f", help="Filter as key=value (repeatable)."),
    page: int | None = typer.Option(None, "--page", "-p", help="Page number; allows browsing without filters."),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print raw JSON."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also export results to a JSON file."),
) -> None:
    """Query a collection by filter criteria."""

    resource_cls = _resolve(resource)
    criteria = _parse_filters(filters or [])
    with _handle_errors(), _build_client(ctx.obj) as client:
        models = client.search(resource_cls, criteria, page=page)
    if not models:
        _err_console.print("[yellow]No results.[/yellow]")
        return
    _emit(resource_cls.resource_name, models, as_json=as_json, output=output)


def run() -> None:
    app()
