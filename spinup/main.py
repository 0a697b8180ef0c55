"""
spinup — CLI entrypoint.

Usage:
    spinup --help
    spinup run config.toml
    spinup -vv run --no-snaps config.yaml
    spinup detect
    spinup config check config.yaml
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from spinup.core.observability.logging_config import level_for_verbosity, setup_logging

from spinup import __version__


@click.group()
@click.version_option(version=__version__, prog_name="spinup")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase log verbosity (-v info, -vv debug, -vvv trace).",
)
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool) -> None:
    """spinup — bring a fresh machine to a declared state."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    # ── Logging setup (once, at process start) ──────────────────
    if verbose or quiet:
        level = level_for_verbosity(verbose, quiet)
    else:
        level = os.environ.get("SPINUP_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("SPINUP_LOG_FILE"),
        log_file_level=os.environ.get("SPINUP_LOG_FILE_LEVEL"),
        quiet_third_party=verbose < 2,
    )


@cli.command()
@click.argument("config_path", type=click.Path(path_type=Path))
@click.option("--no-packages", "-P", is_flag=True, help="Skip the package install.")
@click.option("--no-files", "-F", is_flag=True, help="Skip file downloads.")
@click.option("--no-snaps", "-S", is_flag=True, help="Skip snap installs.")
@click.option("--no-commands", "-C", is_flag=True, help="Skip custom commands and command sets.")
@click.option(
    "--refresh/--no-refresh",
    default=None,
    help="Update and upgrade the system first (default: from the config file).",
)
@click.option("--mock", is_flag=True, help="Record commands instead of executing them.")
@click.option("--print-parsed", is_flag=True, help="Print the parsed configuration before running.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def run(
    ctx: click.Context,
    config_path: Path,
    no_packages: bool,
    no_files: bool,
    no_snaps: bool,
    no_commands: bool,
    refresh: bool | None,
    mock: bool,
    print_parsed: bool,
    as_json: bool,
) -> None:
    """Provision this machine from CONFIG_PATH."""
    from spinup.core.use_cases.run import RunOptions, run_spinup

    options = RunOptions(
        config_path=config_path,
        run_package_installs=not no_packages,
        run_file_downloads=not no_files,
        run_snap_installs=not no_snaps,
        run_custom_commands=not no_commands,
        refresh_system=refresh,
        mock_mode=mock,
    )

    if print_parsed and not as_json:
        _print_parsed(config_path)

    result = run_spinup(options)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)
    icons = {"ok": "✅", "skipped": "⏭️ ", "failed": "❌", "not_run": "·"}
    colors = {"ok": "green", "skipped": "white", "failed": "red", "not_run": "white"}

    if mock and not quiet:
        click.secho("🧪 Mock mode: no commands were executed", fg="yellow")

    if not quiet or not result.ok:
        for phase in result.phases:
            click.secho(f"   {icons[phase.status]} {phase.name}", fg=colors[phase.status], nl=False)
            if phase.status == "ok":
                click.echo(f" ({phase.operations})")
            else:
                click.echo()
            if phase.error:
                for line in phase.error.splitlines():
                    click.echo(f"      {line}")

    if not result.ok:
        failed = result.failed_phase
        click.secho(f"\n❌ Run failed in phase '{failed.name if failed else '?'}'", fg="red", bold=True)
        sys.exit(1)

    if not quiet:
        click.secho("\n✅ Done", fg="green", bold=True)


def _print_parsed(config_path: Path) -> None:
    from spinup.core.config.loader import ConfigError, dump_configuration, load_configuration

    try:
        config = load_configuration(config_path)
    except ConfigError:
        # run_spinup reports the same error
        return
    click.secho("📋 Parsed configuration:", fg="cyan", bold=True)
    click.echo(dump_configuration(config, "yaml"))


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def detect(as_json: bool) -> None:
    """Show the detected OS and the package manager spinup would drive."""
    from spinup.core.use_cases.detect import run_detect

    result = run_detect()

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    data = result.to_dict()
    click.secho("🖥️  Host", fg="cyan", bold=True)
    click.echo(f"   ID:        {data['os_id'] or '-'}")
    click.echo(f"   ID_LIKE:   {data['os_id_like'] or '-'}")

    if not result.supported:
        click.secho("   ❌ Unsupported operating system", fg="red")
        sys.exit(1)

    manager = data["package_manager"]
    click.echo(f"   Target:    {data['target_os']}")
    click.echo(f"   Manager:   {manager['name']}")
    click.echo(f"   Install:   {manager['name']} {manager['install_subcommand']} {manager['autoconfirm']}")
    for argv in data["refresh"]:
        click.echo(f"   Refresh:   {' '.join(argv)}")


# ── Sub-groups ──────────────────────────────────────────────────

from spinup.ui.cli.config import config  # noqa: E402

cli.add_command(config)


if __name__ == "__main__":
    cli()
