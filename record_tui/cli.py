"""Command line entry point"""

from typing import Any, Dict, Optional

import typer

from record_tui import __version__
from record_tui.config import load_config
from record_tui.models import STREAM_QUALITIES

MPV_INSTALL_HINTS = [
    "Error: libmpv was not found. Install mpv:",
    "  - macOS: brew install mpv",
    "  - Ubuntu/Debian: sudo apt-get install libmpv2",
    "  - Arch Linux: sudo pacman -S mpv",
    "  - Fedora: sudo dnf install mpv-libs",
]


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"record-tui {__version__}")
    raise typer.Exit()


def check_mpv() -> bool:
    """Check that python-mpv can load libmpv"""
    try:
        import mpv  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


def launch(config: Dict[str, Any]) -> None:
    """Start the curses application"""
    from record_tui.app import RecordRadioApp

    RecordRadioApp(config).run()


cli = typer.Typer(
    add_completion=False,
    help="Browse and play Radio Record stations in the terminal.",
)


@cli.callback(invoke_without_command=True)
def run(
    quality: Optional[str] = typer.Option(
        None,
        "--quality",
        "-q",
        help="Stream quality: 64, 128, 320 or hls. Overrides the config file.",
    ),
    _version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    if quality is not None and quality not in STREAM_QUALITIES:
        typer.echo(f"Unknown quality {quality!r}; choose from {', '.join(STREAM_QUALITIES)}", err=True)
        raise typer.Exit(code=1)

    if not check_mpv():
        for line in MPV_INSTALL_HINTS:
            typer.echo(line, err=True)
        raise typer.Exit(code=1)

    config = load_config()
    if quality is not None:
        config["stream_quality"] = quality

    launch(config)
