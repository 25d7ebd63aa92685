"""
Flag formatting and validation.

A flag is a transformed key wrapped in a fixed template, PREFIX{KEY}.
Submissions are checked against a stored SHA-256 hash of the correct
flag, so a manifest never needs to carry the flag itself.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Dict, Optional

from .config import DEFAULT_FLAG_PREFIX, default_feedback
from .exceptions import FlagFormatError
from .transformer import transform_key
from .utils import sha256_hex

STATUS_CORRECT = "correct"
STATUS_INCORRECT = "incorrect"
STATUS_FORMAT_ERROR = "format_error"


@dataclass(frozen=True)
class FlagVerdict:
    status: str
    feedback: str

    @property
    def is_correct(self) -> bool:
        return self.status == STATUS_CORRECT


def format_flag(key: str, prefix: str = DEFAULT_FLAG_PREFIX) -> str:
    """Wrap a key as PREFIX{key}."""
    return f"{prefix}{{{key}}}"


def expected_flag(key: str, prefix: str = DEFAULT_FLAG_PREFIX) -> str:
    """Return the flag a challenge built on this initial key expects."""
    return format_flag(transform_key(key), prefix)


def flag_hash(flag: str) -> str:
    return sha256_hex(flag)


def is_well_formed(flag: str, prefix: str = DEFAULT_FLAG_PREFIX) -> bool:
    return flag.startswith(f"{prefix}{{") and flag.endswith("}")


def parse_flag(flag: str, prefix: str = DEFAULT_FLAG_PREFIX) -> str:
    """
    Return the content between the braces of a flag.

    Raises:
        FlagFormatError: if the flag is not wrapped as PREFIX{...}
    """

    if not is_well_formed(flag, prefix):
        raise FlagFormatError(f"Flag must look like {prefix}{{...}}: {flag!r}")
    return flag[len(prefix) + 1 : -1]


def validate_flag(
    submitted: str,
    expected_hash: str,
    prefix: str = DEFAULT_FLAG_PREFIX,
    feedback: Optional[Dict[str, str]] = None,
) -> FlagVerdict:
    """
    Check a submitted flag against the hash of the correct one.

    The comparison is exact: case and surrounding whitespace matter.
    A wrong flag that is not wrapped as PREFIX{...} gets the
    format_error verdict instead of incorrect.
    """

    messages = default_feedback(prefix)
    if feedback:
        messages.update(feedback)

    if hmac.compare_digest(flag_hash(submitted), expected_hash.lower()):
        status = STATUS_CORRECT
    elif not is_well_formed(submitted, prefix):
        status = STATUS_FORMAT_ERROR
    else:
        status = STATUS_INCORRECT

    return FlagVerdict(status=status, feedback=messages[status])
