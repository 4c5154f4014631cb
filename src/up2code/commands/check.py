"""
Check command implementation.
Extracts listings from each document, fetches their canonical text and prints
a unified diff for every listing that is out of date.
"""

import logging
import sys
from typing import Iterable, Optional, TextIO

import requests

from ..core.config import ConfigManager
from ..core.errors import FetchError
from ..core.http_client import ListingFetcher
from ..core.models import CheckReport, Mismatch
from ..processors.comparator import compare
from ..processors.extractor import ListingExtractor, read_document

logger = logging.getLogger(__name__)


def _pick(override, config_manager: ConfigManager, section: str, key: str):
    """Prefer an explicit argument over the config value."""
    if override is not None:
        return override
    return config_manager.get(section, key)


def check_document(
    path: str,
    fetcher: ListingFetcher,
    report: CheckReport,
    *,
    extractor: Optional[ListingExtractor] = None,
    keep_going: bool = False,
    show_url: bool = False,
    out: Optional[TextIO] = None,
) -> None:
    """Check every listing in one document, recording results in *report*.

    Raises:
        OSError: If the document cannot be read (unless *keep_going*)
        FetchError: If a listing cannot be fetched (unless *keep_going*)
    """
    out = out or sys.stdout
    extractor = extractor or ListingExtractor()

    logger.info(f"Checking {path}")
    try:
        text = read_document(path)
    except OSError as e:
        if not keep_going:
            raise
        logger.error(f"{path}: {e}")
        report.errors.append((path, e))
        return
    report.documents += 1

    for listing in extractor.iter_listings(text):
        report.listings += 1
        try:
            checked = fetcher.fetch(listing)
        except FetchError as e:
            if not keep_going:
                raise
            logger.error(f"{path}: {e}")
            report.errors.append((path, e))
            continue

        diff = compare(checked)
        if diff is None:
            logger.debug(f"{path}: {listing.title} is up to date")
            continue

        mismatch = Mismatch(path=path, title=listing.title, url=listing.url, diff=diff)
        report.mismatches.append(mismatch)
        out.write(mismatch.heading(show_url) + "\n")
        out.write(diff)
        out.flush()


def run(
    paths: Iterable[str],
    *,
    config_path: Optional[str] = None,
    keep_going: Optional[bool] = None,
    show_url: Optional[bool] = None,
    delay: Optional[float] = None,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
    out: Optional[TextIO] = None,
) -> CheckReport:
    """Check the listings in each of *paths*, in order.

    Args:
        paths: Documents to scan
        config_path: Optional YAML config file
        keep_going: Collect errors in the report instead of raising the first
        show_url: Include the listing URL in each mismatch heading
        delay: Minimum seconds between requests (overrides config)
        timeout: Request timeout in seconds (overrides config)
        session: Optional requests.Session to reuse (tests pass a fake)
        out: Stream for mismatch output (default: stdout)

    Returns:
        CheckReport with counts, mismatches and (in keep-going mode) errors
    """
    config_manager = ConfigManager(config_path)
    config_manager.load_config()
    if not config_manager.validate_config():
        raise ValueError(f"Invalid configuration in {config_manager.config_path}")

    keep_going = bool(_pick(keep_going, config_manager, 'report', 'keep_going'))
    show_url = bool(_pick(show_url, config_manager, 'report', 'show_url'))

    fetcher = ListingFetcher(
        session=session,
        timeout=_pick(timeout, config_manager, 'fetch', 'timeout'),
        delay=_pick(delay, config_manager, 'fetch', 'delay'),
        raw_query=config_manager.get('fetch', 'raw_query', default=""),
    )
    extractor = ListingExtractor()
    report = CheckReport()

    with fetcher:
        for path in paths:
            check_document(
                path,
                fetcher,
                report,
                extractor=extractor,
                keep_going=keep_going,
                show_url=show_url,
                out=out,
            )

    logger.info(
        f"Checked {report.listings} listings in {report.documents} documents: "
        f"{len(report.mismatches)} out of date, {len(report.errors)} errors"
    )
    return report
