"""
Shared utility helpers.

Small, bounds-checked sequence helpers used by the transformer, plus
hashing. Nothing here knows about keys, flags or manifests.
"""

from __future__ import annotations

import hashlib
from collections.abc import MutableSequence, Sequence
from typing import Any, List


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------


def sha256_hex(text: str) -> str:
    """Return the lowercase hex SHA-256 of a UTF-8 string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Span helpers
# ---------------------------------------------------------------------------


def _check_span(seq: Sequence[Any], start: int, length: int) -> None:
    if start < 0 or length < 0 or start + length > len(seq):
        raise IndexError(
            f"span [{start}, {start + length}) out of range for length {len(seq)}"
        )


def copy_span(seq: Sequence[Any], start: int, length: int) -> List[Any]:
    """Return a copy of seq[start:start + length]."""
    _check_span(seq, start, length)
    return [seq[start + i] for i in range(length)]


def write_span(seq: MutableSequence[Any], start: int, values: Sequence[Any]) -> None:
    """Overwrite seq from start with values, in forward index order."""
    _check_span(seq, start, len(values))
    for i in range(len(values)):
        seq[start + i] = values[i]


def reverse_span(seq: MutableSequence[Any], start: int, length: int) -> None:
    """Reverse seq[start:start + length] in place with two converging pointers."""
    _check_span(seq, start, length)
    lo = start
    hi = start + length - 1
    while lo < hi:
        seq[lo], seq[hi] = seq[hi], seq[lo]
        lo += 1
        hi -= 1
