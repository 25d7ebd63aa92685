"""
Challenge manifest loading, validation, and normalization.

This module answers one question:
    "Which challenges exist, and what flag does each one expect?"

Responsibilities:
- Load the manifest YAML file
- Validate structure, version and keys
- Normalize defaults (flag prefix, feedback messages, flag hashes)
- Expose a clean Python representation

This module does NOT:
- Transform keys itself
- Judge submitted flags
- Print anything
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .config import (
    SUPPORTED_MANIFEST_VERSION,
    default_feedback,
    get_flag_prefix,
)
from .exceptions import InvalidLengthError, ManifestError
from .flag import expected_flag, flag_hash
from .transformer import KeyBuffer

_HASH_RE = re.compile(r"[0-9a-fA-F]{64}")


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass
class ChallengeConfig:
    id: str
    key: str
    prefix: str
    title: Optional[str] = None
    flag_hash: Optional[str] = None
    hints: List[str] = field(default_factory=list)
    feedback: Dict[str, str] = field(default_factory=dict)

    @property
    def expected_hash(self) -> str:
        """The configured flag hash, or the one derived from the key."""
        return self.hash_for()

    def hash_for(self, prefix: Optional[str] = None) -> str:
        """
        Return the expected flag hash when flags carry the given prefix.

        A configured flag_hash is fixed and ignores the prefix.
        """

        if self.flag_hash:
            return self.flag_hash.lower()
        return flag_hash(expected_flag(self.key, prefix or self.prefix))

    def feedback_for(self, prefix: Optional[str] = None) -> Dict[str, str]:
        """Default messages for the prefix, overlaid with this challenge's own."""
        messages = default_feedback(prefix or self.prefix)
        messages.update(self.feedback)
        return messages


@dataclass
class Manifest:
    version: int
    flag_prefix: str
    challenges: Dict[str, ChallengeConfig]

    # ------------------------------------------------------------------
    # Loading API
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path) -> "Manifest":
        """
        Load and validate a manifest file.

        Args:
            path: Path to the manifest YAML file

        Raises:
            ManifestError: if the manifest is missing or invalid

        Returns:
            Manifest
        """

        path = Path(path)
        if not path.exists():
            raise ManifestError(f"Manifest file not found: {path}")

        with path.open("r", encoding="utf-8") as fh:
            try:
                raw = yaml.safe_load(fh) or {}
            except yaml.YAMLError as e:
                raise ManifestError(f"Manifest is not valid YAML: {e}") from e

        if not isinstance(raw, dict):
            raise ManifestError("Manifest must be a mapping")

        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Manifest":
        version = data.get("version")
        if version != SUPPORTED_MANIFEST_VERSION:
            raise ManifestError(f"Unsupported manifest version: {version}")

        prefix = str(data.get("flag_prefix") or get_flag_prefix())
        challenges = cls._parse_challenges(data.get("challenges") or {}, prefix)

        if not challenges:
            raise ManifestError("Manifest defines no challenges")

        return cls(version=version, flag_prefix=prefix, challenges=challenges)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_challenges(data: Dict[str, Any], prefix: str) -> Dict[str, ChallengeConfig]:
        if not isinstance(data, dict):
            raise ManifestError("'challenges' must be a mapping of id to challenge")

        challenges: Dict[str, ChallengeConfig] = {}

        for cid, entry in data.items():
            cid = str(cid)
            if not isinstance(entry, dict):
                raise ManifestError(f"Challenge '{cid}' must be a mapping")

            key = entry.get("key")
            if key is None:
                raise ManifestError(f"Challenge '{cid}' missing 'key'")
            key = str(key)
            try:
                KeyBuffer.from_string(key)
            except InvalidLengthError as e:
                raise ManifestError(f"Challenge '{cid}' has a bad key: {e}") from e

            digest = entry.get("flag_hash")
            if digest is not None and not _HASH_RE.fullmatch(str(digest)):
                raise ManifestError(
                    f"Challenge '{cid}' flag_hash must be 64 hex characters"
                )

            hints = entry.get("hints") or []
            if not isinstance(hints, list):
                raise ManifestError(f"Challenge '{cid}' hints must be a list")

            feedback = entry.get("feedback") or {}
            if not isinstance(feedback, dict):
                raise ManifestError(
                    f"Challenge '{cid}' feedback must be a mapping of status to message"
                )

            challenges[cid] = ChallengeConfig(
                id=cid,
                key=key,
                prefix=prefix,
                title=entry.get("title"),
                flag_hash=str(digest) if digest is not None else None,
                hints=[str(h) for h in hints],
                feedback={str(k): str(v) for k, v in feedback.items()},
            )

        return challenges

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    def get_challenge(self, cid: str) -> ChallengeConfig:
        """
        Return a challenge by id.
        """

        try:
            return self.challenges[cid]
        except KeyError:
            raise ManifestError(f"Challenge not found: {cid}")
