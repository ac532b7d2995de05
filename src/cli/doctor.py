"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import HttpExecutor
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import RemoteError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    """Request the API root, which lists the available collections."""

    try:
        with HttpExecutor(settings) as executor:
            payload = executor.execute("GET", "/")
    except RemoteError as exc:
        return False, str(exc)
    if isinstance(payload, dict):
        return True, "Collections: " + ", ".join(sorted(payload))
    return True, "OK"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings: AppSettings = ctx.obj or AppSettings()

    table = Table(title="rmapi Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row(
        "Listing errors",
        "OK",
        "swallowed (empty results)" if settings.swallow_listing_errors else "propagated",
    )
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    ok_api, detail_api = _check_api(settings)
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] Check RMAPI_BASE_URL or run `rmapi doctor configure`."
        )


@app.command()
def configure(ctx: typer.Context) -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings: AppSettings = ctx.obj or AppSettings()

    base_url = typer.prompt("API base URL", default=settings.base_url, show_default=True).strip()
    timeout = typer.prompt(
        "HTTP timeout (seconds)",
        default=settings.http_timeout_seconds,
        type=float,
        show_default=True,
    )
    swallow = typer.confirm(
        "Return empty results when a listing request fails?",
        default=settings.swallow_listing_errors,
    )

    if not base_url:
        raise typer.BadParameter("base_url is required")
    if timeout <= 0:
        raise typer.BadParameter("timeout must be positive")

    env_path = write_user_env_vars(
        {
            "RMAPI_BASE_URL": base_url,
            "RMAPI_HTTP_TIMEOUT_SECONDS": f"{timeout:g}",
            "RMAPI_SWALLOW_LISTING_ERRORS": "true" if swallow else "false",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
