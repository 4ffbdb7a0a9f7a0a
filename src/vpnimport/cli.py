from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import Settings, load_config
from .core import ImportManager, detect_all
from .core.classifier import classify
from .core.file_utils import read_config_text
from .exceptions import ConfigError
from .logging_config import setup_logging
from .models import ImportResult

console = Console()


def _read_input(settings: Settings, config_path: str) -> str:
    try:
        return read_config_text(Path(config_path), settings.max_config_bytes)
    except ConfigError as exc:
        click.echo(f"✗ {exc}", err=True)
        sys.exit(1)


def _render_result(result: ImportResult) -> None:
    if not result.success:
        error = result.error
        console.print(f"[red]✗ {error.kind.value}[/red]: {escape(error.message)}")
        return

    profile = result.profile
    table = Table(title=escape(profile.name), show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Protocol", profile.protocol)
    table.add_row("Server", escape(profile.server))
    table.add_row("Port", str(profile.port))
    table.add_row("Authentication", profile.auth_method)
    table.add_row("Encryption", profile.encryption)
    table.add_row("Compression", "yes" if profile.compression else "no")
    if profile.username:
        table.add_row("Username", escape(profile.username))
    for key, value in profile.protocol_specific.items():
        table.add_row(key, escape(str(value)))
    console.print(table)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    default=None,
    help="Path to a YAML settings file.",
    type=click.Path(exists=True, dir_okay=False),
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str]):
    """
    VPNImport: identify VPN configuration files and extract connection profiles.
    """
    try:
        settings = load_config(Path(config_path) if config_path else None)
    except (ConfigError, ValidationError) as exc:
        click.echo(f"✗ Invalid settings: {exc}", err=True)
        sys.exit(2)
    setup_logging(settings.log_level, settings.mask_sensitive, settings.log_file)
    ctx.obj = settings


@cli.command("import")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the result as JSON.",
)
@click.pass_obj
def import_command(settings: Settings, config_file: str, as_json: bool):
    """
    Import a VPN configuration file and print its connection profile.
    """
    result = ImportManager().import_config(_read_input(settings, config_file))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _render_result(result)

    if not result.success:
        sys.exit(1)


@cli.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the verdicts as JSON.",
)
@click.pass_obj
def detect(settings: Settings, config_file: str, as_json: bool):
    """
    Show which protocol detectors match a VPN configuration file.
    """
    content = _read_input(settings, config_file)
    outcomes = detect_all(content)
    protocol = classify(content)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "protocol": protocol.value,
                    "detectors": {o.kind.value: o.matched for o in outcomes},
                },
                indent=2,
            )
        )
        return

    table = Table(title="Protocol detection")
    table.add_column("Detector")
    table.add_column("Matched")
    for outcome in outcomes:
        table.add_row(outcome.kind.value, "✓" if outcome.matched else "✗")
    console.print(table)
    console.print(f"Identified protocol: [bold]{protocol.value}[/bold]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
