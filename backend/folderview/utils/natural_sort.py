"""Natural, collation-aware string ordering.

``file2`` sorts before ``file10`` because digit runs compare by value, and
everything else compares by Unicode Collation Algorithm keys, so kana order
phonetically and ahead of kanji rather than by raw code point.
"""

from __future__ import annotations

import functools
import re
from typing import Iterable

from pyuca import Collator

_TOKEN_RE = re.compile(r"\d+|\D+")


@functools.lru_cache(maxsize=1)
def get_collator() -> Collator:
    """Shared DUCET collator (loading the key table is the expensive part)."""
    return Collator()


def collation_key(text: str) -> tuple[int, ...]:
    return get_collator().sort_key(text)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def natural_compare(a: str, b: str) -> int:
    """Compare two strings naturally. Negative, zero or positive like ``cmp``."""
    a_parts = _TOKEN_RE.findall(a)
    b_parts = _TOKEN_RE.findall(b)

    for i in range(max(len(a_parts), len(b_parts))):
        a_part = a_parts[i] if i < len(a_parts) else ""
        b_part = b_parts[i] if i < len(b_parts) else ""

        if a_part.isdecimal() and b_part.isdecimal():
            result = _cmp(int(a_part), int(b_part))
        else:
            result = _cmp(collation_key(a_part), collation_key(b_part))
        if result:
            return result

    return _cmp(len(a_parts), len(b_parts))


natural_sort_key = functools.cmp_to_key(natural_compare)


def natural_sort(names: Iterable[str], reverse: bool = False) -> list[str]:
    return sorted(names, key=natural_sort_key, reverse=reverse)
