"""Shared fixtures for keyflip tests."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_KEY = "A1B2C3D4E5"
SAMPLE_FLAG = "FLAG{5E4D3A1B2C}"
SAMPLE_FLAG_HASH = "1c2d476990e4f50975970c7f9b475fc64b1ca8aae438a99cbd3f4592b321812e"

MANIFEST_YAML = f"""\
version: 1
challenges:
  q3:
    title: Security Key
    key: {SAMPLE_KEY}
    flag_hash: {SAMPLE_FLAG_HASH}
    hints:
      - Two halves.
    feedback:
      correct: Access granted.
  derived:
    key: "0123456789"
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment from leaking into tests."""
    monkeypatch.delenv("KEYFLIP_FLAG_PREFIX", raising=False)
    monkeypatch.delenv("KEYFLIP_MODE", raising=False)


@pytest.fixture
def manifest_file(tmp_path: Path) -> Path:
    path = tmp_path / "challenges.yml"
    path.write_text(MANIFEST_YAML, encoding="utf-8")
    return path
