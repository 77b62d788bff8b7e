"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, get_user_env_file
from core.domain.errors import IpfsApiError
from core.domain.models import EndpointConfig
from core.services.ipfs_api import IpfsApi

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_daemon(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with IpfsApi.from_settings(settings) as api:
            peers = await api.swarm.peers()
        return True, f"{len(peers)} peer(s) connected"
    except IpfsApiError as exc:
        return False, str(exc)


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics against the configured daemon."""

    settings: AppSettings = ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()
    base_url = EndpointConfig(host=settings.host, port=settings.port, version=settings.version).base_url

    table = Table(title="ipfs-api Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", base_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    env_file = get_user_env_file()
    table.add_row("User .env", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    # Conectividad (best-effort)
    ok, detail = asyncio.run(_check_daemon(settings))
    table.add_row("Daemon API", "OK" if ok else "FAIL", detail)

    _console.print(table)

    if not ok:
        _console.print(
            "\n[yellow]Note:[/yellow] Is the daemon running? Set IPFS_API_HOST / IPFS_API_PORT "
            "or pass --host / --port."
        )
        raise typer.Exit(code=1)
