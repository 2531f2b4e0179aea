"""Status-code table command."""

import click

from ledapplet.protocol import DEFAULT_REVISION, REVISIONS, get_revision


@click.command(name="codes")
@click.option(
    '--revision', '-r',
    type=click.Choice(list(REVISIONS)),
    default=DEFAULT_REVISION,
    show_default=True,
    help='Protocol revision to show',
)
def codes(revision: str):
    """Print the status-byte table for a protocol revision."""
    rev = get_revision(revision)

    click.echo(
        f"Protocol revision {rev.name}: grid {rev.rows}x{rev.columns}, "
        f"applets 0-{rev.max_app_num}\n"
    )
    click.echo(f"  {'code':>4}  {'status':<22} {'category':<20} meaning")
    for code, status in sorted(rev.status_codes.items()):
        click.echo(f"  {code:>4}  {status.name:<22} {status.category:<20} {status.description}")
    click.echo(f"  {'*':>4}  {'UNKNOWN':<22} {'opaque failure':<20} any other byte")
