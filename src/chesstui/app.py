"""Application entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from chesstui import __version__
from chesstui.config import AppConfig
from chesstui.core.errors import EngineError
from chesstui.core.notation import STARTING_FEN

app = typer.Typer(
    name="chesstui",
    help="Chess TUI: play and analyse chess in the terminal.",
    add_completion=False,
)


def configure_logging(level: str) -> None:
    """Send log records to stderr so they do not tear the board on stdout."""
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def run_terminal(config: AppConfig) -> int:
    """Launch the terminal front end."""
    from PyQt6.QtCore import QCoreApplication

    from chesstui.ui.terminal import TerminalApp

    # QProcess and QTimer in TerminalApp need an application object first.
    qt_app = QCoreApplication.instance()
    if qt_app is None:
        qt_app = QCoreApplication(sys.argv[:1])
    try:
        terminal = TerminalApp(config)
    except EngineError as exc:
        typer.echo(f"error: {exc}", err=True)
        return 1
    return terminal.run()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"chesstui {__version__}")
        raise typer.Exit()


@app.command()
def main(
    engine_path: Optional[Path] = typer.Option(
        None, "--engine-path", "-P", help="Path to the engine executable"
    ),
    tickrate: int = typer.Option(
        200, "--tickrate", "-T", min=1, help="Tickrate in milliseconds"
    ),
    fen: str = typer.Option(STARTING_FEN, "--fen", help="Starting position"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print version information",
    ),
) -> None:
    """Start an interactive chess session."""
    configure_logging(log_level)
    config = AppConfig(
        engine_path=engine_path,
        tickrate_ms=tickrate,
        start_fen=fen,
        log_level=log_level.upper(),
    )
    raise typer.Exit(run_terminal(config))


if __name__ == "__main__":
    app()
