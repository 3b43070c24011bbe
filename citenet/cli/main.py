# citenet/cli/main.py

from __future__ import annotations

import logging

import typer

from citenet.cli import analyze_cli, network_cli
from citenet.config.settings import settings

app = typer.Typer(help="CLI tools for building and analysing citation networks.")

app.add_typer(network_cli.app, name="network")
app.add_typer(analyze_cli.app, name="analyze")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else settings.LOG_LEVEL)


if __name__ == "__main__":
    app()
