"""Command line entry point using Typer."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from kubedeck import __version__
from kubedeck.constants import APP_TITLE

app = typer.Typer(
    name=APP_TITLE,
    help="Terminal UI for browsing and acting on Kubernetes resources.",
    add_completion=False,
)

console = Console()

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"{APP_TITLE} version {__version__}")
        raise typer.Exit()


def configure_logging(log_file: Path | None, verbose: bool) -> None:
    """Send logs to a file so they never draw over the TUI."""
    level = logging.DEBUG if verbose else logging.WARNING
    if log_file is None:
        logging.basicConfig(level=level, handlers=[logging.NullHandler()])
        return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(filename=str(log_file), level=level, format=_LOG_FORMAT)


@app.command()
def main(
    view: str = typer.Argument("pods", help="Resource kind to open first."),
    context: str | None = typer.Option(
        None, "--context", "-c", help="Kubeconfig context to use."
    ),
    namespace: str | None = typer.Option(
        None, "--namespace", "-n", help="Namespace to show (All for every namespace)."
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to this file."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Start the TUI."""
    configure_logging(log_file, verbose)

    from kubedeck.app import KubeDeckApp

    KubeDeckApp(view=view, context=context, namespace=namespace).run()


if __name__ == "__main__":
    app()
