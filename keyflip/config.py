"""
Global configuration and environment handling.

This module is responsible for:
- Defining the fixed key geometry
- Defining global constants and defaults
- Reading the few values that may come from the environment

Nothing in this file should depend on:
- the manifest structure
- flag validation
- CLI arguments

The key length is NOT configurable. Changing KEY_LENGTH changes what
every flag in every manifest means.
"""

from __future__ import annotations

import os
from typing import Dict, Final

# ---------------------------------------------------------------------------
# Tool / format versioning
# ---------------------------------------------------------------------------

SUPPORTED_MANIFEST_VERSION: Final[int] = 1
TOOL_VERSION: Final[str] = "0.1.0"

# ---------------------------------------------------------------------------
# Key geometry
# ---------------------------------------------------------------------------

KEY_LENGTH: Final[int] = 10
HALF_LENGTH: Final[int] = KEY_LENGTH // 2

# ---------------------------------------------------------------------------
# Default behavior
# ---------------------------------------------------------------------------

DEFAULT_KEY: Final[str] = "A1B2C3D4E5"
DEFAULT_FLAG_PREFIX: Final[str] = "FLAG"
DEFAULT_MANIFEST: Final[str] = "challenges.yml"

DEFAULT_FEEDBACK: Final[Dict[str, str]] = {
    "correct": "Correct! The key has been recovered.",
    "incorrect": "Incorrect flag. Keep trying.",
    "format_error": "Malformed flag. Flags look like {prefix}{{...}}.",
}

# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

ENV_FLAG_PREFIX: Final[str] = "KEYFLIP_FLAG_PREFIX"
ENV_MODE: Final[str] = "KEYFLIP_MODE"  # e.g. dev / prod

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_flag_prefix() -> str:
    """
    Return the flag prefix, honoring the environment override.

    An empty or whitespace-only value falls back to the default.
    """

    raw = os.getenv(ENV_FLAG_PREFIX, "").strip()
    return raw or DEFAULT_FLAG_PREFIX


def get_execution_mode() -> str:
    """
    Return the current execution mode.

    In dev mode the CLI prints tracebacks for unexpected errors even
    without --verbose.

    Returns:
        str: execution mode name
    """

    return os.getenv(ENV_MODE, "prod")


def default_feedback(prefix: str) -> Dict[str, str]:
    """Return the default feedback messages rendered for a flag prefix."""
    return {name: msg.format(prefix=prefix) for name, msg in DEFAULT_FEEDBACK.items()}
