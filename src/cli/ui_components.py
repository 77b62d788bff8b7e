"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from core.domain.models import MerkleNode

_NODE_TYPES = {1: "dir", 2: "file"}


def print_banner(console: Console, base_url: str) -> None:
    """Imprime el banner con el endpoint en uso."""

    title = Text("ipfs-api", style="bold cyan")
    subtitle = Text(base_url, style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(0, 4)))


def build_objects_tree(nodes: Sequence[MerkleNode]) -> Tree:
    """Árbol Rich de los objetos devueltos por `ls` y sus enlaces."""

    root = Tree(Text("Objects", style="bold"))
    for node in nodes:
        _add_node(root, node)
    return root


def _add_node(parent: Tree, node: MerkleNode) -> None:
    label = Text(node.hash, style="cyan")
    if node.name:
        label.append(f"  {node.name}", style="white")
    if node.type is not None:
        label.append(f"  [{_NODE_TYPES.get(node.type, node.type)}]", style="dim")
    if node.size is not None:
        label.append(f"  {node.size} B", style="green")
    branch = parent.add(label)
    for child in node.links:
        _add_node(branch, child)


def build_peers_table(addresses: Iterable[object]) -> Table:
    table = Table(title="Swarm Peers")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Address", style="magenta")
    for index, address in enumerate(addresses, start=1):
        table.add_row(str(index), str(address))
    return table


def build_addrs_table(addrs: dict[str, Any]) -> Table:
    """Tabla peer -> direcciones (`swarm/addrs`). Valores no-lista se muestran tal cual."""

    table = Table(title="Known Addresses")
    table.add_column("Peer", style="cyan", no_wrap=True)
    table.add_column("Addresses", style="magenta")
    for peer_id, values in sorted(addrs.items()):
        if isinstance(values, list):
            table.add_row(peer_id, "\n".join(str(v) for v in values))
        else:
            table.add_row(peer_id, str(values))
    return table
