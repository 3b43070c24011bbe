# citenet/cli/common.py

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from citenet.errors import ValidationError
from citenet.graph.io import load_network
from citenet.models.network import Network


def load_network_or_exit(path: Path, console: Console) -> Network:
    """
    Load a saved network, exiting with code 1 and a readable message on failure.
    """
    path = Path(path)
    if not path.exists():
        console.print(f"[red]Network file not found:[/red] {path}")
        raise typer.Exit(code=1)

    try:
        return load_network(path)
    except (json.JSONDecodeError, ValidationError) as exc:
        console.print(f"[red]Could not read network from {path}:[/red] {exc}")
        raise typer.Exit(code=1)
