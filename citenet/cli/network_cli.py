# citenet/cli/network_cli.py

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from citenet.cli.common import load_network_or_exit
from citenet.clients import SearchBackend, get_backend
from citenet.config.settings import settings
from citenet.errors import CitenetError
from citenet.graph.io import save_network
from citenet.graph.sorting import SortAlgorithm
from citenet.graph.weighting import WeightingMode
from citenet.models.inputs import UserInputs
from citenet.models.network import Network
from citenet.models.tree import Tree
from citenet.service import (
    BuildOptions,
    CitationNetworkResult,
    build_citation_network_for,
    close_backend,
)

app = typer.Typer(help="Build and inspect citation networks.")

console = Console()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _run_build(
    corpus_id: str,
    user_inputs: UserInputs,
    options: BuildOptions,
    backend: SearchBackend,
) -> CitationNetworkResult:
    try:
        return await build_citation_network_for(corpus_id, user_inputs, options, backend=backend)
    finally:
        await close_backend(backend)


def _print_network(network: Network, limit: Optional[int] = None) -> None:
    stats = network.stats
    console.print(
        f"[bold]Root {network.root.id}[/bold]: {network.root.label}\n"
        f"{stats.total_nodes} nodes, {stats.total_edges} edges "
        f"({stats.citing_count} citing, {stats.referenced_count} referenced)"
    )

    tbl = Table(show_header=True, header_style="bold")
    tbl.add_column("Id")
    tbl.add_column("Role")
    tbl.add_column("Year", justify="right")
    tbl.add_column("Citations", justify="right")
    tbl.add_column("Weight", justify="right")
    tbl.add_column("Title")

    nodes = network.nodes if limit is None else network.nodes[: limit + 1]
    for node in nodes:
        tbl.add_row(
            node.id,
            node.role.value,
            str(node.year) if node.year is not None else "",
            str(node.citations),
            f"{node.weight:.3f}" if node.weight is not None else "",
            node.label,
        )

    console.print(tbl)


def _print_tree(tree: Tree) -> None:
    console.print("\n[bold]Tree levels:[/bold]")
    for level in tree.levels:
        console.print(f"  {level.level}. {level.description}: {len(level.papers)} paper(s)")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("build")
def build(
    corpus_id: str = typer.Argument(..., help="Corpus id of the root paper."),
    keyword: List[str] = typer.Option(
        [],
        "--keyword",
        "-k",
        help="Search keyword; repeat for several.",
    ),
    author: List[str] = typer.Option(
        [],
        "--author",
        "-a",
        help="Author name to search for; repeat for several.",
    ),
    reference: List[str] = typer.Option(
        [],
        "--reference",
        "-r",
        help="Corpus id of a paper the root cites; repeat for several.",
    ),
    sort: SortAlgorithm = typer.Option(
        SortAlgorithm.RELEVANCE,
        "--sort",
        help="Node order after the root.",
    ),
    weighting: WeightingMode = typer.Option(
        WeightingMode.BALANCED,
        "--weighting",
        help="How node relevance weights are computed.",
    ),
    limit: int = typer.Option(
        settings.default_search_limit,
        "--limit",
        "-n",
        help="Number of related papers to request (1-1000).",
    ),
    mock: Optional[bool] = typer.Option(
        None,
        "--mock/--live",
        help="Use canned fixtures instead of the Veritus API (default: CITENET_MOCK_MODE).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the network as JSON to this file.",
    ),
) -> None:
    """
    Search for papers related to CORPUS_ID and build its citation network.
    """
    try:
        options = BuildOptions(sort_algorithm=sort, weighting_mode=weighting, limit=limit)
        user_inputs = UserInputs.create(keywords=keyword, authors=author, references=reference)
        result = asyncio.run(_run_build(corpus_id, user_inputs, options, get_backend(mock)))
    except CitenetError as exc:
        console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
        raise typer.Exit(code=1)

    console.print(f"[dim]{result.job_type.value}: {', '.join(result.phrases)}[/dim]")
    _print_network(result.network)
    if result.tree is not None:
        _print_tree(result.tree)

    if output is not None:
        path = save_network(result.network, output)
        console.print(f"\n[green]Saved network to[/green] {path}")


@app.command("show")
def show(
    network_file: Path = typer.Argument(..., help="Network JSON written by `network build`."),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=0,
        help="Only list the first N non-root nodes.",
    ),
) -> None:
    """
    Print a saved network's stats and nodes.
    """
    network = load_network_or_exit(network_file, console)
    _print_network(network, limit=limit)
