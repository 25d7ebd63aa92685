"""Test cli.py - commands, exit codes and output."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from keyflip.cli import main
from tests.conftest import SAMPLE_FLAG, SAMPLE_FLAG_HASH


@pytest.mark.cli
class TestRun:
    def test_default_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["run"]) == 0

        out = capsys.readouterr().out
        assert "Initial Key: A1B2C3D4E5\n" in out
        assert "Final Key: FLAG{5E4D3A1B2C}\n" in out
        assert out.index("Initial Key") < out.index("Final Key")

    def test_given_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["run", "0123456789"]) == 0

        assert "Final Key: FLAG{9876501234}" in capsys.readouterr().out

    def test_prefix_option(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--prefix", "CG", "run"]) == 0

        assert "Final Key: CG{5E4D3A1B2C}" in capsys.readouterr().out

    def test_prefix_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("KEYFLIP_FLAG_PREFIX", "CTF")

        assert main(["run"]) == 0

        assert "Final Key: CTF{5E4D3A1B2C}" in capsys.readouterr().out

    def test_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["run", "--json"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output == {
            "initial_key": "A1B2C3D4E5",
            "final_key": "5E4D3A1B2C",
            "flag": SAMPLE_FLAG,
            "flag_hash": SAMPLE_FLAG_HASH,
        }

    def test_verbose_shows_halves(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-v", "run"]) == 0

        out = capsys.readouterr().out
        assert "First half:  A1B2C" in out
        assert "Second half: 3D4E5" in out

    @pytest.mark.parametrize("key", ["A1B2C3D4E", "A1B2C3D4E5F"])
    def test_invalid_length(self, key: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["run", key]) == 1

        captured = capsys.readouterr()
        assert "invalid_length" in captured.err
        assert "Final Key" not in captured.out


@pytest.mark.cli
class TestVerify:
    def test_correct_against_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["verify", SAMPLE_FLAG, "--key", "A1B2C3D4E5"]) == 0

        assert "Correct" in capsys.readouterr().out

    def test_incorrect_against_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["verify", "FLAG{A1B2C3D4E5}", "--key", "A1B2C3D4E5"]) == 1

        assert "Incorrect" in capsys.readouterr().err

    def test_format_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["verify", "5E4D3A1B2C", "--key", "A1B2C3D4E5"]) == 1

        assert "Malformed" in capsys.readouterr().out

    def test_bad_key_length(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["verify", SAMPLE_FLAG, "--key", "A1B2"]) == 1

        assert "invalid_length" in capsys.readouterr().err

    def test_correct_against_challenge(
        self, manifest_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["-m", str(manifest_file), "verify", SAMPLE_FLAG, "--challenge", "q3"]) == 0

        assert "Access granted." in capsys.readouterr().out

    def test_json_verdict(self, manifest_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        rc = main(["-m", str(manifest_file), "verify", "FLAG{nope}", "--challenge", "q3", "--json"])

        assert rc == 1
        output = json.loads(capsys.readouterr().out)
        assert output["status"] == "incorrect"
        assert output["is_correct"] is False
        assert output["challenge_id"] == "q3"

    def test_unknown_challenge(self, manifest_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-m", str(manifest_file), "verify", SAMPLE_FLAG, "--challenge", "q9"]) == 1

        assert "Challenge not found: q9" in capsys.readouterr().err

    def test_missing_manifest(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        rc = main(["-m", str(tmp_path / "none.yml"), "verify", SAMPLE_FLAG, "--challenge", "q3"])

        assert rc == 1
        assert "Manifest file not found" in capsys.readouterr().err

    def test_prefix_override_with_challenge(
        self, manifest_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        argv = ["-m", str(manifest_file), "--prefix", "CG", "verify", "CG{9876501234}", "--challenge", "derived"]

        assert main(argv) == 0

        assert "Correct" in capsys.readouterr().out

    def test_prefix_override_feedback(
        self, manifest_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        argv = ["-m", str(manifest_file), "--prefix", "CG", "verify", "FLAG{9876501234}", "--challenge", "derived"]

        assert main(argv) == 1

        out = capsys.readouterr().out
        assert "CG{...}" in out
        assert "FLAG{...}" not in out

    def test_requires_a_target(self) -> None:
        with pytest.raises(SystemExit):
            main(["verify", SAMPLE_FLAG])


@pytest.mark.cli
class TestOtherCommands:
    def test_challenges(self, manifest_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-m", str(manifest_file), "challenges"]) == 0

        out = capsys.readouterr().out
        assert "q3:" in out
        assert "derived:" in out
        assert SAMPLE_FLAG_HASH in out
        assert "2 challenge(s)" in out

    def test_challenges_quiet(self, manifest_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-q", "-m", str(manifest_file), "challenges"]) == 0

        assert capsys.readouterr().out == ""

    def test_hash(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["hash", SAMPLE_FLAG]) == 0

        assert capsys.readouterr().out.strip() == SAMPLE_FLAG_HASH

    @pytest.mark.parametrize("argv", [[], ["help"], ["-h"]])
    def test_help(self, argv: list, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(argv) == 0

        out = capsys.readouterr().out
        assert "keyflip" in out
        assert "COMMANDS:" in out
