#!/usr/bin/env python3
"""
Main CLI Entry Point for finsync

Provides the command-line interface for the Frollo → PocketSmith sync.
"""

import logging
import os

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    finsync - Frollo to PocketSmith transaction sync

    Imports bank transactions aggregated by Frollo into PocketSmith and keeps
    PocketSmith balances from falling behind.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["FINSYNC_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("finsync").setLevel(logging.DEBUG)

    try:
        config_obj = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config_obj

    if verbose:
        click.echo(f"Environment: {config_obj.environment.value}")
        click.echo(f"Data directory: {config_obj.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from finsync import __author__, __version__

    click.echo(f"finsync v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration (credentials redacted)."""
    config_obj = ctx.obj["config"]
    settings = config_obj.to_dict()

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Reports Directory: {config_obj.reports_dir}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")

    for section in ("frollo", "pocketsmith", "sync"):
        click.echo(f"  {section.capitalize()}:")
        for key, value in settings[section].items():
            click.echo(f"    {key}: {value}")


from .sync import accounts, sync  # noqa: E402

main.add_command(sync)
main.add_command(accounts)


if __name__ == "__main__":
    main()
