"""
CLI Integration Tests.

Runs the ReportGuard command-line interface end to end in a subprocess.
"""

import json
import os
import subprocess
import sys

import pytest

from reportguard import __version__


def run_cli(*args, input_text=None):
    """Run the CLI command and return result."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("REPORTGUARD_")}
    cmd = [sys.executable, "-m", "reportguard.cli.main"] + list(args)
    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        input=input_text,
        timeout=30,
        env=env,
    )
    return result


# =============================================================================
# Version / Help Tests
# =============================================================================

class TestVersion:
    """Tests for --version flag."""

    def test_version_shows_version(self):
        """--version displays the package version."""
        result = run_cli("--version")

        assert result.returncode == 0
        assert f"reportguard {__version__}" in result.stdout


class TestHelp:
    """Tests for help output."""

    def test_no_command_shows_help(self):
        """Running without a command prints help and fails."""
        result = run_cli()

        assert result.returncode == 1
        assert "detect" in result.stdout

    @pytest.mark.parametrize("command", ["detect", "restore", "feedback"])
    def test_command_help(self, command):
        """Every subcommand has --help."""
        result = run_cli(command, "--help")
        assert result.returncode == 0


# =============================================================================
# Detect Tests
# =============================================================================

class TestDetect:
    """Tests for the detect command."""

    def test_text_output(self):
        """Text mode prints the redacted text."""
        result = run_cli("detect", "Contact me at john.doe@example.com or 07911 123456")

        assert result.returncode == 0
        assert "Contact me at [EMAIL_1] or [PHONE_UK_MOBILE_1]" in result.stdout
        assert "john.doe@example.com" not in result.stdout

    def test_json_output(self):
        """JSON mode prints a parseable result."""
        result = run_cli("detect", "SSN 123-45-6789", "--format", "json")

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["redacted_text"] == "SSN [SSN_1]"
        assert data["stats"] == {"SSN": 1}
        assert data["backend"] == "local"
        assert data["degraded"] is False

    def test_stdin(self):
        """"-" reads the text from stdin."""
        result = run_cli("detect", "-", "--format", "json", input_text="ip 10.0.0.1")

        assert result.returncode == 0
        assert json.loads(result.stdout)["redacted_text"] == "ip [IP_ADDRESS_1]"

    def test_fail_on_pii(self):
        """--fail-on-pii exits 1 when something was found."""
        assert run_cli("detect", "SSN 123-45-6789", "--fail-on-pii").returncode == 1
        assert run_cli("detect", "nothing to see", "--fail-on-pii").returncode == 0

    def test_remote_without_url_degrades(self):
        """A remote backend with no URL gives an unredacted, degraded result."""
        result = run_cli("detect", "SSN 123-45-6789", "--backend", "remote", "--format", "json")

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["degraded"] is True
        assert data["redacted_text"] == "SSN 123-45-6789"


# =============================================================================
# Restore Tests
# =============================================================================

class TestRestore:
    """Tests for the detect --map-out / restore round trip."""

    def test_round_trip(self, tmp_path):
        """restore puts back exactly what detect removed."""
        original = "Mail jane@example.org, card 4111 1111 1111 1111"
        map_file = tmp_path / "map.json"

        detected = run_cli(
            "detect", "-", "--no-table", "--map-out", str(map_file),
            input_text=original,
        )
        assert detected.returncode == 0
        redacted = detected.stdout.rstrip("\n")
        assert redacted == "Mail [EMAIL_1], card [CREDIT_CARD_1]"

        restored = run_cli("restore", "--map", str(map_file), input_text=redacted)
        assert restored.returncode == 0
        assert restored.stdout.rstrip("\n") == original

    def test_trailing_newline_preserved(self, tmp_path):
        """detect then restore reproduces stdin byte for byte, final newline included."""
        original = "SSN 123-45-6789\nmail jane@example.org\n"
        map_file = tmp_path / "map.json"

        detected = run_cli(
            "detect", "-", "--no-table", "--map-out", str(map_file),
            input_text=original,
        )
        assert detected.stdout == "SSN [SSN_1]\nmail [EMAIL_1]\n"

        restored = run_cli("restore", "--map", str(map_file), input_text=detected.stdout)
        assert restored.stdout == original

    def test_json_output_as_map(self, tmp_path):
        """detect --format json output can be used as the map."""
        map_file = tmp_path / "result.json"
        detected = run_cli("detect", "SSN 123-45-6789", "--format", "json")
        map_file.write_text(detected.stdout)

        restored = run_cli("restore", "SSN [SSN_1]", "--map", str(map_file))
        assert restored.stdout.rstrip("\n") == "SSN 123-45-6789"

    def test_missing_map(self, tmp_path):
        """A missing map file is an error."""
        result = run_cli("restore", "x", "--map", str(tmp_path / "missing.json"))

        assert result.returncode == 1
        assert "Map file not found" in result.stderr

    def test_invalid_map(self, tmp_path):
        """A map without detections is an error."""
        map_file = tmp_path / "bad.json"
        map_file.write_text(json.dumps({"nothing": True}))

        result = run_cli("restore", "x", "--map", str(map_file))
        assert result.returncode == 1


# =============================================================================
# Feedback Tests
# =============================================================================

class TestFeedback:
    """Tests for the feedback command."""

    def test_records_to_store(self, tmp_path):
        """Feedback is appended to the JSONL store."""
        store = tmp_path / "feedback.jsonl"
        result = run_cli(
            "feedback", "false_positive", "Mark Rivers",
            "--type", "NAME", "--context", "met Mark Rivers", "--store", str(store),
        )

        assert result.returncode == 0
        (line,) = store.read_text(encoding="utf-8").splitlines()
        event = json.loads(line)
        assert event["feedback_type"] == "false_positive"
        assert event["detected_type"] == "NAME"
        assert event["context"] == "met Mark Rivers"

    def test_invalid_kind_rejected(self, tmp_path):
        """argparse rejects unknown kinds."""
        result = run_cli(
            "feedback", "maybe", "x", "--type", "NAME",
            "--store", str(tmp_path / "f.jsonl"),
        )
        assert result.returncode == 2

    def test_unwritable_store(self, tmp_path):
        """A store that cannot be written exits 1."""
        blocker = tmp_path / "file"
        blocker.write_text("x")

        result = run_cli(
            "feedback", "false_negative", "x", "--type", "NAME",
            "--store", str(blocker / "feedback.jsonl"),
        )
        assert result.returncode == 1
