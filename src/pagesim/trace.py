"""Trace files — the sequence of page references to replay.

A trace is a text file with one decimal page number per line::

    1
    2

    3

Blank lines are skipped.  Parsing is permissive in the way C's
``atoi`` is: leading whitespace and an optional sign are accepted,
parsing stops at the first non-digit, and a line with no leading digits
at all (undecodable bytes included) reads as page 0.  Range checking is
left to the page table, so a negative or oversized page still reaches
the simulator and aborts it there.  The one exception is a number too
long to convert at all, which is rejected while parsing.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING

from pagesim.errors import PageOutOfRangeError, TraceError

if TYPE_CHECKING:
    from pathlib import Path

_LEADING_INT = re.compile(rb"\s*([+-]?)0*(\d+)")

# Longer digit runs cannot name a page in any address space we build, and
# would overrun int()'s string-conversion limit.
_MAX_DIGITS = 18


def parse_line(line: bytes | str) -> int | None:
    """Return the page number on *line*, or None if the line is blank.

    Lines are parsed as raw bytes so undecodable text reads as page 0
    like any other non-numeric line.

    Raises:
        PageOutOfRangeError: If the line holds a number too long to be a page.

    """
    if isinstance(line, str):
        line = line.encode()
    if not line.strip():
        return None
    match = _LEADING_INT.match(line)
    if match is None:
        return 0
    sign, digits = match.groups()
    if len(digits) > _MAX_DIGITS:
        msg = (
            f"No page {sign.decode()}{digits[:12].decode()}... "
            f"({len(digits)} digits) in current page file"
        )
        raise PageOutOfRangeError(msg)
    return int(sign + digits)


def iter_trace(path: Path) -> Iterator[int]:
    """Yield page numbers from the trace file at *path* lazily.

    Raises:
        TraceError: If the file cannot be opened or read.
        PageOutOfRangeError: If a line holds an oversized number.

    """
    try:
        with path.open("rb") as f:
            for line in f:
                page = parse_line(line)
                if page is not None:
                    yield page
    except OSError as e:
        msg = f"Failed to open specified trace file: {path}"
        raise TraceError(msg) from e


def read_trace(path: Path) -> list[int]:
    """Return every page number in the trace file at *path*.

    Raises:
        TraceError: If the file cannot be opened or read.
        PageOutOfRangeError: If a line holds an oversized number.

    """
    return list(iter_trace(path))
