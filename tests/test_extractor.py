"""Tests for listing extraction."""

from __future__ import annotations

import re
import sys
from pathlib import Path

import pytest

# Ensure the repository's src/ directory is importable without installation.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from up2code.core.models import Listing  # noqa: E402
from up2code.processors.comparator import diff  # noqa: E402
from up2code.processors.extractor import (  # noqa: E402
    ListingExtractor,
    find_listings,
    read_listings,
)

TWO_LISTINGS = (
    "# Chapter 1\n"
    "\n"
    "Some prose.\n"
    "\n"
    "```rust\n"
    "fn main() {\n"
    "    println!(\"Hello, world!\");\n"
    "}\n"
    "```\n"
    "([Listing `hello/1`](https://github.com/example/book/blob/main/hello/1/src/main.rs))\n"
    "\n"
    "More prose.\n"
    "\n"
    "```\n"
    "let x = 1;\n"
    "```\n"
    "([Listing `hello/2`](https://github.com/example/book/blob/main/hello/2/src/lib.rs))\n"
)


def test_find_listings_returns_empty_for_plain_text():
    assert find_listings("") == []
    assert find_listings("# Title\n\nJust some prose with a [link](https://example.com).\n") == []


def test_code_block_without_link_is_ignored():
    text = "```python\nprint('hi')\n```\n\nSee [the docs](https://example.com).\n"
    assert find_listings(text) == []


def test_two_listings_are_returned_in_order_without_cross_contamination():
    listings = find_listings(TWO_LISTINGS)

    assert listings == [
        Listing(
            title="Listing `hello/1`",
            local_text='fn main() {\n    println!("Hello, world!");\n}\n',
            url="https://github.com/example/book/blob/main/hello/1/src/main.rs",
        ),
        Listing(
            title="Listing `hello/2`",
            local_text="let x = 1;\n",
            url="https://github.com/example/book/blob/main/hello/2/src/lib.rs",
        ),
    ]


def test_empty_code_block_is_skipped():
    text = (
        "```rust\n"
        "```\n"
        "([Listing `empty`](https://example.com/empty.rs))\n"
        "```rust\n"
        "fn f() {}\n"
        "```\n"
        "([Listing `full`](https://example.com/full.rs))\n"
    )
    listings = find_listings(text)

    assert [listing.title for listing in listings] == ["Listing `full`"]
    assert listings[0].local_text == "fn f() {}\n"


def test_link_must_immediately_follow_closing_fence():
    text = "```rust\nfn f() {}\n```\n\n([Listing `gap`](https://example.com/gap.rs))\n"
    assert find_listings(text) == []


def test_title_may_span_lines():
    text = "```\ncode\n```\n([Listing\nover two lines](https://example.com/x.rs))\n"
    (listing,) = find_listings(text)
    assert listing.title == "Listing\nover two lines"
    assert listing.url == "https://example.com/x.rs"


def test_custom_pattern_must_define_named_groups():
    with pytest.raises(ValueError, match="title, link"):
        ListingExtractor(re.compile(r"(?P<code>x)"))


def test_custom_pattern_narrows_matches():
    pattern = re.compile(
        r"^```rust\n(?P<code>[^`]+?\n)?```\n\(\[Listing `(?P<title>[\s\S]+?)`\]\((?P<link>.*?)\)",
        re.MULTILINE,
    )
    listings = ListingExtractor(pattern).find_listings(TWO_LISTINGS)

    assert [listing.title for listing in listings] == ["hello/1"]


def test_read_listings_reads_utf8_file(tmp_path):
    doc = tmp_path / "chapter.md"
    doc.write_text("```\nprintln!(\"héllo\");\n```\n([Listing `é`](https://example.com/e.rs))\n", encoding="utf-8")

    (listing,) = read_listings(doc)
    assert listing.local_text == 'println!("héllo");\n'
    assert listing.title == "Listing `é`"


def test_read_listings_missing_file_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        read_listings(tmp_path / "missing.md")


def test_read_listings_invalid_utf8_raises_oserror(tmp_path):
    doc = tmp_path / "latin1.md"
    doc.write_bytes(b"caf\xe9\n")
    with pytest.raises(OSError, match="not valid UTF-8"):
        read_listings(doc)


def test_read_listings_keeps_crlf_line_endings(tmp_path):
    doc = tmp_path / "windows.md"
    doc.write_bytes(b"```rust\r\nfn f() {}\r\n```\r\n([Listing `crlf`](https://example.com/f.rs))\r\n")

    (listing,) = read_listings(doc)

    assert listing.local_text == "fn f() {}\r\n"
    assert listing.url == "https://example.com/f.rs"
    assert diff(listing.local_text, "// header\r\nfn f() {}\r\n") is None


def test_read_listings_directory_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        read_listings(tmp_path)
