"""
CLI commands for configuration files.

Thin wrappers over ``spinup.core.use_cases.config_check`` and
``spinup.core.config.loader``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.group()
def config() -> None:
    """Configuration — check, show."""


@config.command("check")
@click.argument("config_path", type=click.Path(path_type=Path))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def config_check(config_path: Path, as_json: bool) -> None:
    """Validate a configuration file without running anything."""
    from spinup.core.use_cases.config_check import check_config

    result = check_config(config_path)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        data = result.to_dict()
        summary = data.get("summary", {})
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Target OS:       {data.get('target_os')}")
        click.echo(f"   Package list:    {'yes' if summary.get('package_list') else 'no'}")
        click.echo(f"   Downloads:       {summary.get('file_downloads', 0)} ({summary.get('files', 0)} files)")
        click.echo(f"   Custom commands: {summary.get('custom_commands', 0)}")
        click.echo(f"   Command sets:    {summary.get('command_sets', 0)}")
        click.echo(f"   Snaps:           {'yes' if summary.get('snaps') else 'no'}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


@config.command("show")
@click.argument("config_path", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    show_default=True,
    help="Output format.",
)
def config_show(config_path: Path, fmt: str) -> None:
    """Print a configuration file as spinup parsed it."""
    from spinup.core.config.loader import ConfigError, dump_configuration, load_configuration

    try:
        parsed = load_configuration(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.echo(dump_configuration(parsed, fmt).rstrip("\n"))
