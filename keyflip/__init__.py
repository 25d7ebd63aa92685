"""
keyflip

Derives a flag from a 10-character key by swapping the key's halves and
reversing the half that moves to the front, and checks submitted flags
against challenge manifests.
"""

__version__ = "0.1.0"

from .config import DEFAULT_FLAG_PREFIX, KEY_LENGTH
from .exceptions import FlagFormatError, InvalidLengthError, KeyflipError, ManifestError
from .flag import FlagVerdict, expected_flag, flag_hash, format_flag, parse_flag, validate_flag
from .manifest import ChallengeConfig, Manifest
from .transformer import KeyBuffer, process_key, restore_key, transform_key, untransform_key

__all__ = [
    "DEFAULT_FLAG_PREFIX",
    "KEY_LENGTH",
    "KeyflipError",
    "InvalidLengthError",
    "FlagFormatError",
    "ManifestError",
    "FlagVerdict",
    "expected_flag",
    "flag_hash",
    "format_flag",
    "parse_flag",
    "validate_flag",
    "ChallengeConfig",
    "Manifest",
    "KeyBuffer",
    "process_key",
    "restore_key",
    "transform_key",
    "untransform_key",
]
