"""Tests for CLI tool."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

from chatsafe import __version__
from chatsafe.cli.main import main


def run_cli(*args: str, stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "chatsafe.cli.main", *args],
        capture_output=True,
        text=True,
        input=stdin,
    )


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = run_cli("--help")
    assert result.returncode == 0
    assert "chatsafe: Chat-Safe Serializer" in result.stdout
    assert "--encode" in result.stdout
    assert "--analyze" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = run_cli("--version")
    assert result.returncode == 0
    assert f"chatsafe {__version__}" in result.stdout


def test_cli_no_args() -> None:
    """Test CLI with no arguments (should show help)."""
    result = run_cli()
    assert result.returncode == 0
    assert "chatsafe: Chat-Safe Serializer" in result.stdout


def test_cli_encode(tmp_path: Path) -> None:
    """Test --encode with a JSON file."""
    source = tmp_path / "data.json"
    source.write_text(json.dumps({"a": 5, "b": "Foo Bar"}), encoding="utf-8")

    result = run_cli("--encode", str(source))
    assert result.returncode == 0
    assert result.stdout.strip() == "1:Tsa:5sb:~Foo~`Bar:z"


def test_cli_encode_stdin() -> None:
    """Test --encode reading stdin."""
    result = run_cli("--encode", "-", stdin="[true, null, 45]")
    assert result.returncode == 0
    assert result.stdout.strip() == "1:T1t2z3n45:z"


def test_cli_decode(tmp_path: Path) -> None:
    """Test --decode prints JSON."""
    source = tmp_path / "message.txt"
    source.write_text("1:T1sb:sa:5z\n", encoding="utf-8")

    result = run_cli("--decode", str(source))
    assert result.returncode == 0
    assert json.loads(result.stdout) == {"1": "b", "a": 5}


def test_cli_decode_invalid(tmp_path: Path) -> None:
    """Test --decode with a malformed string."""
    source = tmp_path / "message.txt"
    source.write_text("1:zz", encoding="utf-8")

    result = run_cli("--decode", str(source))
    assert result.returncode == 1
    assert "Error: unserialize: garbage" in result.stderr


def test_cli_decode_circular(tmp_path: Path) -> None:
    """Test --decode refuses data JSON cannot hold."""
    source = tmp_path / "message.txt"
    source.write_text("1:Tsself:r0:z", encoding="utf-8")

    result = run_cli("--decode", str(source))
    assert result.returncode == 1
    assert "Error" in result.stderr


def test_cli_analyze(tmp_path: Path) -> None:
    """Test --analyze prints a token breakdown."""
    source = tmp_path / "message.txt"
    source.write_text("1:T152T182r0:z3e4r2:z\n", encoding="utf-8")

    result = run_cli("--analyze", str(source))
    assert result.returncode == 0
    assert "chatsafe: Chat-Safe Serializer" in result.stdout
    assert "table_ref" in result.stdout
    assert "Tables written in full: 3, referenced again: 2" in result.stdout


def test_cli_missing_file() -> None:
    """Test CLI with a missing file."""
    result = run_cli("--analyze", "nonexistent.txt")
    assert result.returncode == 1
    assert "not found" in result.stderr.lower()


def test_cli_verbose_logs(tmp_path: Path) -> None:
    """Test --verbose turns on codec debug logging."""
    source = tmp_path / "data.json"
    source.write_text("[1, 2]", encoding="utf-8")

    result = run_cli("--verbose", "--encode", str(source))
    assert result.returncode == 0
    assert "chatsafe.codec.encoder" in result.stderr


def test_main_in_process(tmp_path: Path, capsys) -> None:
    """Test main() can be called directly."""
    source = tmp_path / "data.json"
    source.write_text('{"k": "v"}', encoding="utf-8")

    assert main(["--encode", str(source)]) == 0
    assert capsys.readouterr().out.strip() == "1:Tsk:sv:z"
