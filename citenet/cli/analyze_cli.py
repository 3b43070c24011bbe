# citenet/cli/analyze_cli.py

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from citenet.analytics.clustering import ClusterKind, cluster_nodes
from citenet.analytics.paths import connected_component, find_all_paths, find_shortest_path
from citenet.cli.common import load_network_or_exit
from citenet.models.network import Network

app = typer.Typer(help="Path-finding and clustering over a saved citation network.")

console = Console()


def _require_node(network: Network, node_id: str) -> None:
    if node_id not in network:
        console.print(f"[red]Node '{node_id}' is not in the network.[/red]")
        raise typer.Exit(code=1)


def _describe(network: Network, node_id: str) -> str:
    node = network.node(node_id)
    return f"{node_id} ({node.label})" if node is not None else node_id


@app.command("path")
def path(
    network_file: Path = typer.Argument(..., help="Network JSON written by `network build`."),
    start: str = typer.Argument(..., help="Start node id."),
    end: str = typer.Argument(..., help="End node id."),
    max_depth: int = typer.Option(
        5,
        "--max-depth",
        "-d",
        min=1,
        help="Longest path (in edges) to enumerate.",
    ),
) -> None:
    """
    Show how two papers are connected, ignoring edge direction.
    """
    network = load_network_or_exit(network_file, console)
    _require_node(network, start)
    _require_node(network, end)

    shortest = find_shortest_path(network, start, end)
    if shortest is None:
        console.print(f"[yellow]No path between '{start}' and '{end}'.[/yellow]")
    else:
        console.print(f"[bold]Shortest path ({len(shortest) - 1} hops):[/bold]")
        for node_id in shortest:
            console.print(f"  • {_describe(network, node_id)}")

    paths = find_all_paths(network, start, end, max_depth=max_depth)
    console.print(f"\n[bold]{len(paths)} path(s) within {max_depth} hops[/bold]")
    for p in paths:
        console.print("  " + " -> ".join(p))

    component = connected_component(network, start)
    console.print(f"\nConnected component of '{start}': {len(component)} node(s)")


@app.command("clusters")
def clusters(
    network_file: Path = typer.Argument(..., help="Network JSON written by `network build`."),
    by: ClusterKind = typer.Option(
        ClusterKind.YEAR,
        "--by",
        help="Cluster dimension.",
    ),
    year_range: int = typer.Option(
        5,
        "--year-range",
        min=1,
        help="Bucket width in years when clustering by year.",
    ),
) -> None:
    """
    Group a saved network's nodes by year bucket, citation range or role.
    """
    network = load_network_or_exit(network_file, console)
    result = cluster_nodes(network.nodes, by, year_range=year_range)

    tbl = Table(show_header=True, header_style="bold")
    tbl.add_column("Cluster")
    tbl.add_column("Size", justify="right")
    tbl.add_column("Nodes")

    for cluster in result:
        tbl.add_row(cluster.label, str(len(cluster.nodes)), ", ".join(cluster.node_ids))

    console.print(f"[bold]Clusters by {by.value}:[/bold]")
    console.print(tbl)
