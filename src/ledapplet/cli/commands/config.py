"""Config command implementations."""

import logging
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from ledapplet.exceptions import ConfigurationError, wrap_pydantic_error
from ledapplet.model_manager import PydanticPersistence
from ledapplet.models import DEFAULT_CONFIG_PATH, ClientConfig
from ledapplet.protocol import REVISIONS

logger = logging.getLogger(__name__)


def config_path_from(ctx: click.Context) -> Path:
    """Config path chosen with --config-file, or the default."""
    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or DEFAULT_CONFIG_PATH


def load_config(ctx: click.Context) -> ClientConfig:
    """Load the config for a command, turning config errors into a clean CLI failure."""
    path = config_path_from(ctx)
    try:
        return ClientConfig.load_or_default(path)
    except ConfigurationError as e:
        logger.error(f"Failed to load config from {path}: {e.technical_message}")
        raise click.ClickException(e.get_full_message()) from e


def save_config(cfg: ClientConfig, path: Path) -> None:
    """Save the config, turning write failures into a clean CLI failure."""
    try:
        cfg.save(path)
    except ConfigurationError as e:
        raise click.ClickException(e.get_full_message()) from e


@click.group(name="config")
def config():
    """Show or change the client configuration."""
    pass


@config.command(name="show")
@click.option('--field', '-f', type=click.Choice(list(ClientConfig.model_fields)), default=None,
              help='Show a single field')
@click.pass_context
def show_config(ctx, field: Optional[str]):
    """Display the active configuration."""
    cfg = load_config(ctx)

    if field:
        click.echo(f"{field}: {getattr(cfg, field)}")
        return

    click.echo(f"Config file: {config_path_from(ctx)}\n")
    for name, info in ClientConfig.model_fields.items():
        click.echo(f"  {name}: {getattr(cfg, name)}")
        if info.description:
            click.echo(f"      {info.description}")


@config.command(name="set")
@click.option('--host', type=str, default=None, help='Board-control process host')
@click.option('--port', type=int, default=None, help='Board-control process TCP port')
@click.option('--revision', type=click.Choice(list(REVISIONS)), default=None,
              help='Protocol revision of the board firmware')
@click.option('--timeout', type=float, default=None, help='Socket timeout in seconds')
@click.option('--no-timeout', is_flag=True, help='Block indefinitely (clear the timeout)')
@click.pass_context
def set_config(ctx, host, port, revision, timeout, no_timeout: bool):
    """Update one or more configuration values."""
    path = config_path_from(ctx)
    cfg = load_config(ctx)

    updates = {
        name: value
        for name, value in (("host", host), ("port", port), ("revision", revision), ("timeout", timeout))
        if value is not None
    }
    if no_timeout:
        updates["timeout"] = None

    if not updates:
        raise click.UsageError("Nothing to set. Pass at least one option, see --help.")

    try:
        cfg = ClientConfig.model_validate({**cfg.model_dump(), **updates})
    except ValidationError as e:
        raise click.ClickException(wrap_pydantic_error(e, str(path)).get_full_message()) from e

    save_config(cfg, path)
    for name, value in updates.items():
        click.echo(f"Set {name} = {value}")


@config.command(name="reset")
@click.pass_context
def reset_config(ctx):
    """Reset the configuration to defaults."""
    path = config_path_from(ctx)
    save_config(ClientConfig(), path)
    click.echo(f"Configuration reset: {path}")


@config.command(name="validate")
@click.pass_context
def validate_config(ctx):
    """Check the config file without changing it."""
    path = config_path_from(ctx)
    is_valid, error = PydanticPersistence.validate_json(path, ClientConfig)
    if not is_valid:
        raise click.ClickException(error)
    click.echo(f"Config OK: {path}")


@config.command(name="path")
@click.pass_context
def config_path(ctx):
    """Print the config file location."""
    click.echo(str(config_path_from(ctx)))
