"""
Key transformation: swap the halves of a key and reverse the new front.

This module performs the actual rearrangement. It is intentionally dumb
about flags, manifests and output formatting.

For a key K of KEY_LENGTH characters split into halves K[0:5] and K[5:10]:

    output[0:5]  = reversed(K[5:10])
    output[5:10] = K[0:5]

Only the half that moves to the front is reversed.
"""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any, Iterable, List, Union

from .config import HALF_LENGTH, KEY_LENGTH
from .exceptions import InvalidLengthError
from .utils import copy_span, reverse_span, write_span


class KeyBuffer(MutableSequence):
    """
    A mutable key of exactly KEY_LENGTH single characters.

    Items can be replaced but never inserted or removed, so the length
    is fixed for the buffer's whole life.
    """

    __slots__ = ("_chars",)

    def __init__(self, chars: Iterable[str]):
        chars = list(chars)
        if len(chars) != KEY_LENGTH:
            raise InvalidLengthError(len(chars), KEY_LENGTH)
        for ch in chars:
            self._check_char(ch)
        self._chars: List[str] = chars

    @classmethod
    def from_string(cls, key: str) -> "KeyBuffer":
        return cls(key)

    @staticmethod
    def _check_char(value: Any) -> None:
        if not isinstance(value, str) or len(value) != 1:
            raise TypeError(f"key items must be single characters, got {value!r}")

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __getitem__(self, index: Union[int, slice]) -> Union[str, List[str]]:
        return self._chars[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            raise TypeError("KeyBuffer does not support slice assignment")
        self._check_char(value)
        self._chars[index] = value

    def __delitem__(self, index: Any) -> None:
        raise TypeError("KeyBuffer has a fixed length")

    def insert(self, index: int, value: str) -> None:
        raise TypeError("KeyBuffer has a fixed length")

    def __len__(self) -> int:
        return KEY_LENGTH

    # ------------------------------------------------------------------
    # Convenience
    # ------------------------------------------------------------------

    @property
    def first_half(self) -> str:
        return "".join(self._chars[:HALF_LENGTH])

    @property
    def second_half(self) -> str:
        return "".join(self._chars[HALF_LENGTH:])

    def __str__(self) -> str:
        return "".join(self._chars)

    def __repr__(self) -> str:
        return f"KeyBuffer({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeyBuffer):
            return self._chars == other._chars
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented


def _require_key_length(key: MutableSequence) -> None:
    if len(key) != KEY_LENGTH:
        raise InvalidLengthError(len(key), KEY_LENGTH)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def process_key(key: MutableSequence) -> None:
    """
    Transform a key in place.

    Works on any mutable sequence of KEY_LENGTH items: a list of
    characters, a bytearray, or a KeyBuffer.

    Raises:
        InvalidLengthError: if the key is not exactly KEY_LENGTH long.
            The key is left untouched.
    """

    _require_key_length(key)

    # The old second half must be saved before the first half lands on it.
    scratch = copy_span(key, HALF_LENGTH, HALF_LENGTH)
    write_span(key, HALF_LENGTH, copy_span(key, 0, HALF_LENGTH))
    write_span(key, 0, scratch)
    reverse_span(key, 0, HALF_LENGTH)


def restore_key(key: MutableSequence) -> None:
    """
    Undo process_key in place.

    Raises:
        InvalidLengthError: if the key is not exactly KEY_LENGTH long.
    """

    _require_key_length(key)

    reverse_span(key, 0, HALF_LENGTH)
    scratch = copy_span(key, 0, HALF_LENGTH)
    write_span(key, 0, copy_span(key, HALF_LENGTH, HALF_LENGTH))
    write_span(key, HALF_LENGTH, scratch)


def transform_key(key: str) -> str:
    """Return the transformed form of a key string."""
    buffer = KeyBuffer.from_string(key)
    process_key(buffer)
    return str(buffer)


def untransform_key(key: str) -> str:
    """Return the original key for a transformed key string."""
    buffer = KeyBuffer.from_string(key)
    restore_key(buffer)
    return str(buffer)
