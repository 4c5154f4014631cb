"""
Data models for up2code.

Listings are created by the extractor, enriched by the fetcher and consumed by
the comparator. None of them outlive the document they came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class Listing:
    """A fenced code block paired with the link to its canonical source."""

    title: str
    local_text: str
    url: str


@dataclass(frozen=True)
class CheckedListing:
    """A listing together with the canonical text fetched from its URL."""

    title: str
    local_text: str
    remote_text: str
    url: str

    @classmethod
    def from_listing(cls, listing: Listing, remote_text: str) -> "CheckedListing":
        return cls(
            title=listing.title,
            local_text=listing.local_text,
            remote_text=remote_text,
            url=listing.url,
        )


@dataclass(frozen=True)
class Mismatch:
    """One out-of-date listing found in a document."""

    path: str
    title: str
    url: str
    diff: str

    def heading(self, show_url: bool = False) -> str:
        if show_url:
            return f"{self.path}: {self.title} ({self.url})"
        return f"{self.path}: {self.title}"


@dataclass
class CheckReport:
    """Accumulates the outcome of a single check run.

    ``errors`` is only populated when the run is told to keep going past
    failures; otherwise the first failure propagates to the caller.
    """

    documents: int = 0
    listings: int = 0
    mismatches: List[Mismatch] = field(default_factory=list)
    errors: List[Tuple[str, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.mismatches and not self.errors


__all__ = ["Listing", "CheckedListing", "Mismatch", "CheckReport"]
