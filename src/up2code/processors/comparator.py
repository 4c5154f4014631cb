"""Compare a local listing against its canonical text.

A listing is up to date when the canonical text contains it verbatim, or
contains it with every non-empty line indented by four spaces or by a tab.
Documentation tools often re-indent snippets, so both forms are accepted.
"""

from __future__ import annotations

import difflib
from itertools import islice
from typing import List, Optional

from ..core.models import CheckedListing

INDENT_PREFIXES = ("    ", "\t")
NO_NEWLINE_MARKER = "\\ No newline at end of file\n"


def _split_lines(text: str) -> List[str]:
    """Split on newlines, dropping a trailing carriage return from each line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _split_keepends(text: str) -> List[str]:
    """Split after each newline only, keeping the terminators."""
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def indent(text: str, prefix: str) -> str:
    """Prefix every non-empty line of *text* with *prefix*.

    Empty lines stay empty. Every output line, including the last, ends in a
    newline, so the line count is unchanged.

    Examples:
        >>> indent("foo\\n    bar\\n\\nbaz\\n", "    ")
        '    foo\\n        bar\\n\\n    baz\\n'
    """
    out = []
    for line in _split_lines(text):
        out.append(f"{prefix}{line}\n" if line else "\n")
    return "".join(out)


def is_up_to_date(local: str, remote: str) -> bool:
    """Return True if *remote* contains *local*, as-is or indented."""
    if local in remote:
        return True
    return any(indent(local, prefix) in remote for prefix in INDENT_PREFIXES)


def unified_diff(local: str, remote: str, context: int = 3) -> str:
    """Return hunks of a unified diff from *local* to *remote*.

    The ``---``/``+++`` file header is omitted; the caller prints its own
    heading above the hunks.
    """
    a = _split_keepends(local)
    b = _split_keepends(remote)
    out = []
    for line in islice(difflib.unified_diff(a, b, n=context, lineterm=""), 2, None):
        if line.startswith("@@"):
            out.append(line + "\n")
        elif line.endswith("\n"):
            out.append(line)
        else:
            out.append(line + "\n" + NO_NEWLINE_MARKER)
    return "".join(out)


def diff(local: str, remote: str) -> Optional[str]:
    """Diff a local listing against its canonical version.

    Returns None when the listing is up to date, otherwise the unified diff.
    """
    if is_up_to_date(local, remote):
        return None
    return unified_diff(local, remote)


def compare(checked: CheckedListing) -> Optional[str]:
    return diff(checked.local_text, checked.remote_text)


__all__ = ["indent", "is_up_to_date", "unified_diff", "diff", "compare"]
