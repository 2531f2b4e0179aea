"""Main entry point for ledapplet."""

from ledapplet.cli.main import cli

if __name__ == "__main__":
    cli()
