"""HTTP client that retrieves the canonical text of a listing."""

import logging
import time
from typing import Optional

import requests

from .errors import FetchError, StatusError
from .models import CheckedListing, Listing

logger = logging.getLogger(__name__)

DEFAULT_RAW_QUERY = "raw=true"


class ListingFetcher:
    """Fetch canonical listings over a shared session with optional pacing.

    Each call to :meth:`fetch` makes exactly one GET request. There is no retry
    and no caching; failures are raised to the caller.

    Args:
        session: Optional pre-built ``requests.Session`` (tests pass a fake)
        timeout: Request timeout in seconds (default: 15)
        delay: Minimum seconds between successive requests (default: 0)
        raw_query: Query appended to each URL to ask for the unrendered file
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
        delay: float = 0.0,
        raw_query: str = DEFAULT_RAW_QUERY,
    ):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.delay = max(delay, 0.0)
        self.raw_query = raw_query
        self.last_request_time: Optional[float] = None

    def _rate_limit(self):
        """Sleep so that requests start at least ``delay`` seconds apart."""
        if self.delay and self.last_request_time is not None:
            elapsed = time.time() - self.last_request_time
            if elapsed < self.delay:
                wait = self.delay - elapsed
                logger.debug("Pacing: sleeping %.2fs before next request", wait)
                time.sleep(wait)
        self.last_request_time = time.time()

    def raw_url(self, url: str) -> str:
        """Return *url* with the raw query appended."""
        if not self.raw_query:
            return url
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}{self.raw_query}"

    def fetch(self, listing: Listing) -> CheckedListing:
        """Fetch the canonical text for *listing*.

        Raises:
            FetchError: On DNS, connection, timeout or other transport errors
            StatusError: When the server returns a non-success status code
        """
        url = self.raw_url(listing.url)
        self._rate_limit()
        logger.debug("GET %s", url)
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(listing.url, str(e), cause=e) from e

        if not 200 <= r.status_code < 300:
            raise StatusError(listing.url, r.status_code, getattr(r, "reason", "") or "")

        # requests falls back to ISO-8859-1 for text/* without a charset
        if "charset=" not in r.headers.get("Content-Type", "").lower():
            r.encoding = "utf-8"

        return CheckedListing.from_listing(listing, r.text)

    def close(self):
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
