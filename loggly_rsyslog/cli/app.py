"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from .. import converge as convergence
from ..errors import LogglyRsyslogError
from ..secretstore import DataBagDirectoryLookup
from ..service.notify import SystemctlRestart
from ..settings import LogglySettings, load_settings
from .parsers import parse_file_mode, parse_log_file

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="loggly-rsyslog",
    help="Converge the rsyslog forwarding rule that ships logs to Loggly.",
)

AttributesOption = Annotated[
    str,
    typer.Option(
        "--attributes",
        help="YAML file with node attributes (token, tags, log_files, tls, rsyslog).",
        metavar="FILE",
    ),
]
DatabagDirOption = Annotated[
    str,
    typer.Option(
        "--databag-dir",
        help="Directory holding data bags as BAG/ITEM.json.",
        metavar="DIR",
    ),
]
TokenOption = Annotated[
    str,
    typer.Option(
        "--token",
        help="Literal Loggly token; skips the data bag lookup.",
        metavar="TOKEN",
    ),
]
TagOption = Annotated[
    list[str],
    typer.Option("--tag", help="Tag added to every log line. Repeatable.", metavar="TAG"),
]
LogFileOption = Annotated[
    list[str],
    typer.Option(
        "--log-file",
        help='Extra file to tail. JSON format: {"filename":"...","tag":"...","statefile":"...","poll_interval":10}. Repeatable.',
        metavar="JSON",
    ),
]
NoTlsOption = Annotated[
    bool,
    typer.Option("--no-tls", help="Forward over plain TCP on port 514."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose logging."),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def _load(
    attributes: str,
    databag_dir: str,
    token: str,
    tags: list[str],
    log_files: list[str],
    no_tls: bool,
) -> LogglySettings:
    overrides: dict[str, Any] = {}
    if token:
        overrides["token"] = {"from_databag": False, "value": token}
    if tags:
        overrides["tags"] = tags
    if log_files:
        overrides["log_files"] = [parse_log_file(value) for value in log_files]
    if no_tls:
        overrides["tls"] = {"enabled": False}
    if databag_dir:
        overrides["databag_dir"] = Path(databag_dir)

    try:
        return load_settings(Path(attributes) if attributes else None, **overrides)
    except (ValidationError, FileNotFoundError) as e:
        logger.error(f"Invalid settings: {e}")
        raise typer.Exit(code=2) from e


@app.command()
def render(
    attributes: AttributesOption = "",
    databag_dir: DatabagDirOption = "",
    token: TokenOption = "",
    tags: TagOption = [],
    log_files: LogFileOption = [],
    no_tls: NoTlsOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Print the rendered configuration without writing it."""
    _configure_logging(verbose)

    settings = _load(attributes, databag_dir, token, tags, log_files, no_tls)
    lookup = DataBagDirectoryLookup(settings.databag_dir)

    try:
        text = convergence.render(settings, lookup)
    except LogglyRsyslogError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    typer.echo(text, nl=False)


@app.command()
def converge(
    attributes: AttributesOption = "",
    databag_dir: DatabagDirOption = "",
    token: TokenOption = "",
    tags: TagOption = [],
    log_files: LogFileOption = [],
    no_tls: NoTlsOption = False,
    dest_root: Annotated[
        str,
        typer.Option(
            "--dest-root",
            help="Write under DIR instead of / (default: /).",
            metavar="DIR",
        ),
    ] = "",
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal (default: rsyslog.file_mode).",
            metavar="OCTAL",
        ),
    ] = "",
    no_restart: Annotated[
        bool,
        typer.Option("--no-restart", help="Do not restart rsyslog after a change."),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Render the configuration, write it if changed and restart rsyslog."""
    _configure_logging(verbose)

    logger.debug("Starting loggly-rsyslog")

    settings = _load(attributes, databag_dir, token, tags, log_files, no_tls)
    if file_mode:
        settings.rsyslog.file_mode = parse_file_mode(file_mode)

    lookup = DataBagDirectoryLookup(settings.databag_dir)
    restarter = None if no_restart else SystemctlRestart()

    try:
        result = convergence.converge(
            settings,
            lookup,
            restarter,
            dest_root=Path(dest_root) if dest_root else None,
        )
    except LogglyRsyslogError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    state = "updated" if result.changed else "unchanged"
    logger.info(f"{result.path} {state}")
    logger.debug(f"Included steps: {result.included_steps or 'none'}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
