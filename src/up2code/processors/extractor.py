"""
Listing extraction from Markdown-like documents.

A listing is a fenced code block immediately followed by a link line:

    ```rust
    fn main() {}
    ```
    ([Listing `hello/1`](https://github.com/example/repo/blob/main/src/main.rs))

The code body, the link title and the link URL are captured as named groups.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, List, Optional, Pattern, Union

from ..core.models import Listing

logger = logging.getLogger(__name__)

# Opening fence with optional language tag, backtick-free body lines (the last
# one keeps its newline), closing fence, then "([title](url)" on the next line.
LISTING_PATTERN = re.compile(
    r"^```.*?\n"
    r"(?P<code>[^`]+?\n)?"
    r"```\r?\n"
    r"\(\[(?P<title>[\s\S]+?)\]\((?P<link>.*?)\)",
    re.MULTILINE,
)


class ListingExtractor:
    """Find listings in text using a compiled pattern.

    The pattern must define the named groups ``code``, ``title`` and ``link``.
    Matches where any of them did not participate are skipped.
    """

    REQUIRED_GROUPS = ("code", "title", "link")

    def __init__(self, pattern: Optional[Pattern[str]] = None):
        self.pattern = pattern if pattern is not None else LISTING_PATTERN
        missing = [g for g in self.REQUIRED_GROUPS if g not in self.pattern.groupindex]
        if missing:
            raise ValueError(f"Listing pattern is missing named groups: {', '.join(missing)}")

    def iter_listings(self, text: str) -> Iterator[Listing]:
        for m in self.pattern.finditer(text):
            code, title, link = m.group("code", "title", "link")
            if code is None or title is None or link is None:
                logger.debug("Skipping incomplete listing at offset %d", m.start())
                continue
            yield Listing(title=title, local_text=code, url=link)

    def find_listings(self, text: str) -> List[Listing]:
        """Return all listings in *text* in order of appearance."""
        return list(self.iter_listings(text))


_default_extractor = ListingExtractor()


def find_listings(text: str) -> List[Listing]:
    """Return all listings in *text* using the default pattern."""
    return _default_extractor.find_listings(text)


def read_document(path: Union[str, Path]) -> str:
    """Read a document as UTF-8.

    Line endings are kept as written so CRLF listings compare against CRLF
    sources byte for byte.

    Raises:
        OSError: If the file is missing, unreadable or not valid UTF-8
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise OSError(f"{path}: not valid UTF-8 ({e})") from e


def read_listings(
    path: Union[str, Path],
    extractor: Optional[ListingExtractor] = None,
) -> List[Listing]:
    """Return all listings in the file at *path*."""
    extractor = extractor or _default_extractor
    return extractor.find_listings(read_document(path))


__all__ = [
    "LISTING_PATTERN",
    "ListingExtractor",
    "find_listings",
    "read_document",
    "read_listings",
]
