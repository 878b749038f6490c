"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from postnl.adapters.http_client import build_async_client
from postnl.adapters.rest.base import base_url
from postnl.core.config import PostNLSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: PostNLSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = PostNLSettings()

    table = Table(title="PostNL Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "MISSING", str(env_file))
    if settings.api_key_value():
        table.add_row("API key", "OK", "POSTNL_API_KEY set")
    else:
        table.add_row("API key", "FAIL", "Run `postnl setup` or set POSTNL_API_KEY")
    if settings.customer_number and settings.customer_code:
        table.add_row("Customer", "OK", f"{settings.customer_number} / {settings.customer_code}")
    else:
        table.add_row("Customer", "OPTIONAL", "Needed for barcodes, labels and reference lookups")
    table.add_row("API mode", "OK", settings.api_mode.label())
    table.add_row("Environment", "OK", base_url(settings.sandbox))
    cache = f"TTL {settings.cache_ttl_seconds:g}s" if settings.cache_enabled() else "disabled"
    table.add_row("Response cache", "OK", cache)

    # Connectivity (best-effort)
    ok_http = True
    if not offline:
        ok_http, detail_http = asyncio.run(_check_http(base_url(settings.sandbox), settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not settings.api_key_value() or not ok_http:
        raise typer.Exit(code=1)
