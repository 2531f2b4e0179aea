"""Probe command: check that an applet can be created."""

import sys

import click

from ledapplet.exceptions import handle_errors
from ledapplet.models import ClientConfig
from ledapplet.protocol import SeparatorKind
from ledapplet.session import AppletSession

from .config import load_config


def _report_failure(message: str) -> None:
    click.echo(f"[FAIL] {message}", err=True)


@handle_errors(
    operation_name="probe applet",
    user_notification=_report_failure,
    fallback_value=False,
    re_raise=False,
)
def run_handshake(cfg: ClientConfig, app_num: int, kind: SeparatorKind) -> bool:
    """Create and immediately release an applet. Returns False on any failure."""
    with AppletSession.from_config(cfg, app_num, kind) as session:
        click.echo(f"[OK] {session.rows}x{session.columns} grid, separator {kind.name}")
    return True


@click.command(name="probe")
@click.option('--app', '-a', 'app_num', type=int, required=True, help='Applet number to create')
@click.option(
    '--separator', '-s',
    type=click.Choice([kind.name.lower() for kind in SeparatorKind], case_sensitive=False),
    default='empty',
    show_default=True,
    help='Separator kind for the handshake',
)
@click.option('--port', '-p', type=int, default=None, help='Override the configured port')
@click.pass_context
def probe(ctx, app_num: int, separator: str, port):
    """
    Perform the CreateApplet handshake and report the outcome.

    The connection is closed again right away; nothing is drawn.
    """
    cfg = load_config(ctx)
    if port is not None:
        cfg = cfg.model_copy(update={"port": port})

    kind = SeparatorKind[separator.upper()]
    click.echo(f"Probing applet {app_num} at {cfg.host}:{cfg.port} (revision {cfg.revision})...")

    if not run_handshake(cfg, app_num, kind):
        sys.exit(1)
