"""Reading transaction files and writing mined patterns."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import IO

from .expansion import sorted_patterns
from .typing import FrequentPatterns

_ITEM = re.compile(r"\d+", re.ASCII)


def parse_transactions(text: str) -> list[list[int]]:
    """Parse one transaction per line; items are runs of ASCII digits.

    Any other character separates items. A trailing empty line is
    ignored, an empty line elsewhere is an empty transaction.
    """
    lines = text.split("\n")
    if lines and not lines[-1].strip():
        lines.pop()
    return [[int(token) for token in _ITEM.findall(line)] for line in lines]


def read_transactions(path: str | Path) -> list[list[int]]:
    # every byte decodes under latin-1; non-digit bytes are separators
    return parse_transactions(Path(path).read_text(encoding="latin-1"))


def format_patterns(patterns: FrequentPatterns, n_transactions: int) -> list[str]:
    """Lines of ``a,b,c:0.1234`` sorted by pattern size, then items.

    The number after the colon is the support count divided by
    *n_transactions*, with 4 decimals.
    """
    return [
        f"{','.join(str(item) for item in items)}:{support / n_transactions:.4f}"
        for items, support in sorted_patterns(patterns)
    ]


def write_lines(out: IO[str], lines: Iterable[str]) -> None:
    for line in lines:
        out.write(line)
        out.write("\n")


def write_patterns(path: str | Path, patterns: FrequentPatterns, n_transactions: int) -> None:
    with open(path, "w") as out:
        write_lines(out, format_patterns(patterns, n_transactions))
