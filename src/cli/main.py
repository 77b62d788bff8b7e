"""CLI de `ipfs-api` (Typer + Rich).

Por qué una capa fina:
- Toda la lógica vive en `core.services.ipfs_api`; aquí solo se lee la
  configuración, se ejecuta la corrutina y se presenta el resultado.
- Los errores del pipeline (`IpfsApiError`) se muestran en rojo y terminan con
  código 1; cualquier otro error es un bug y se deja propagar.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console

from cli.doctor import app as doctor_app
from cli.ui_components import build_addrs_table, build_objects_tree, build_peers_table, print_banner
from core.config import AppSettings
from core.domain.errors import IpfsApiError
from core.domain.models import EndpointConfig
from core.logging_setup import configure_logging
from core.services.ipfs_api import IpfsApi

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Client for the IPFS daemon HTTP API.")
app.add_typer(doctor_app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", help="Daemon API host."),
    port: Optional[int] = typer.Option(None, "--port", help="Daemon API port."),
    api_version: Optional[str] = typer.Option(None, "--api-version", help="API path prefix."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
) -> None:
    overrides: dict[str, Any] = {
        "host": host,
        "port": port,
        "version": api_version,
        "log_level": log_level,
    }
    settings = AppSettings(**{k: v for k, v in overrides.items() if v is not None})
    configure_logging(settings.log_level)
    ctx.obj = settings


def _call(settings: AppSettings, command: Callable[[IpfsApi], Awaitable[T]]) -> T:
    async def _runner() -> T:
        async with IpfsApi.from_settings(settings) as api:
            return await command(api)

    try:
        return asyncio.run(_runner())
    except IpfsApiError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _print_json(payload: Any) -> None:
    _console.print_json(json.dumps(payload, ensure_ascii=False))


@app.command()
def ls(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., help="Content identifier (base58)."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a tree."),
) -> None:
    """List the links of an object."""

    nodes = _call(ctx.obj, lambda api: api.ls(identifier))
    if as_json:
        _print_json([node.model_dump(mode="json", by_alias=True) for node in nodes])
        return
    _console.print(build_objects_tree(nodes))


@app.command()
def cat(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., help="Content identifier (base58)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to a file."),
) -> None:
    """Print the raw content of an object."""

    data = _call(ctx.obj, lambda api: api.cat(identifier))
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(data)
        _err_console.print(f"[green]Saved {len(data)} bytes to:[/green] {output}")
        return
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


@app.command()
def peers(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """List connected swarm peers."""

    addresses = _call(ctx.obj, lambda api: api.swarm.peers())
    if as_json:
        _print_json([str(address) for address in addresses])
        return
    _console.print(build_peers_table(addresses))


@app.command()
def addrs(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """List known addresses per peer."""

    result = _call(ctx.obj, lambda api: api.swarm.addrs())
    if as_json:
        _print_json(result)
        return
    _console.print(build_addrs_table(result))


@app.command()
def connect(
    ctx: typer.Context,
    address: str = typer.Argument(..., help="Peer multiaddr, e.g. /ip4/1.2.3.4/tcp/4001/p2p/Qm..."),
) -> None:
    """Open a connection to a peer."""

    result = _call(ctx.obj, lambda api: api.swarm.connect(address))
    _console.print(result)


@app.command()
def info(ctx: typer.Context) -> None:
    """Show the endpoint the client would use."""

    settings: AppSettings = ctx.obj
    endpoint = EndpointConfig(host=settings.host, port=settings.port, version=settings.version)
    print_banner(_console, endpoint.base_url)


def run() -> None:
    app()
