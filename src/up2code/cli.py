"""Command-line entry point for up2code."""

from __future__ import annotations

import logging
import sys

import click

from .commands import check as check_cmd
from .core.errors import Up2CodeError

USAGE = "Usage: up2code [PATH, ...]"

# Setup logging early so submodules inherit sane defaults
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@click.command()
@click.argument("paths", nargs=-1)
@click.option("--config", default=None, help="Path to a YAML config file (defaults to $UP2CODE_CONFIG or ./up2code.yaml)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--keep-going", is_flag=True, help="Report errors at the end instead of stopping at the first one")
@click.option("--show-url", is_flag=True, help="Include the listing URL in mismatch headings")
@click.option("--delay", type=float, default=None, help="Seconds to wait between requests (default: 0)")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds (default: 15)")
def cli(
    paths: tuple[str, ...],
    config: str | None,
    verbose: bool,
    keep_going: bool,
    show_url: bool,
    delay: float | None,
    timeout: float | None,
) -> None:
    """Check that code listings in Markdown files match their canonical source."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not paths:
        click.echo(USAGE, err=True)
        return

    try:
        report = check_cmd.run(
            list(paths),
            config_path=config,
            keep_going=keep_going or None,
            show_url=show_url or None,
            delay=delay,
            timeout=timeout,
        )
    except (Up2CodeError, OSError, ValueError) as exc:
        click.echo(f"up2code: {exc}", err=True)
        sys.exit(1)

    if report.errors:
        for path, exc in report.errors:
            click.echo(f"{path}: {exc}", err=True)
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
