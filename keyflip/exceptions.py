"""
Exception types raised by keyflip.

Every error the tool raises on purpose derives from KeyflipError so the
CLI can report it at the command boundary.
"""

from __future__ import annotations


class KeyflipError(RuntimeError):
    """Base class for keyflip failures."""


class InvalidLengthError(KeyflipError, ValueError):
    """A key did not have exactly the required number of characters."""

    kind = "invalid_length"

    def __init__(self, length: int, expected: int):
        self.length = length
        self.expected = expected
        super().__init__(
            f"{self.kind}: key must be exactly {expected} characters, got {length}"
        )


class FlagFormatError(KeyflipError, ValueError):
    """A flag was not wrapped as PREFIX{...}."""


class ManifestError(KeyflipError):
    """The challenge manifest is missing or invalid."""
