"""Check code listings in Markdown files against their canonical source."""

from __future__ import annotations

from typing import Iterable, Optional

from .commands import check as check_cmd
from .core.errors import FetchError, StatusError, Up2CodeError
from .core.models import CheckedListing, CheckReport, Listing, Mismatch
from .processors.comparator import diff, indent, is_up_to_date
from .processors.extractor import find_listings, read_listings

__all__ = [
    'check',
    'find_listings',
    'read_listings',
    'diff',
    'indent',
    'is_up_to_date',
    'Listing',
    'CheckedListing',
    'Mismatch',
    'CheckReport',
    'Up2CodeError',
    'FetchError',
    'StatusError',
]


def check(
    paths: Iterable[str],
    *,
    keep_going: Optional[bool] = None,
    show_url: Optional[bool] = None,
    delay: Optional[float] = None,
    timeout: Optional[float] = None,
    config_path: Optional[str] = None,
) -> CheckReport:
    """Run the check programmatically.

    Mismatches are printed to stdout as they are found and also returned in
    the report.

    Args:
        paths: Markdown documents to scan.
        keep_going: Collect errors in the report rather than raising the first.
        show_url: Include the listing URL in mismatch headings.
        delay: Minimum seconds between successive requests.
        timeout: Request timeout in seconds.
        config_path: Optional YAML config; defaults to $UP2CODE_CONFIG or ./up2code.yaml.
    """
    return check_cmd.run(
        paths,
        config_path=config_path,
        keep_going=keep_going,
        show_url=show_url,
        delay=delay,
        timeout=timeout,
    )
