from __future__ import annotations

import sys
from pathlib import Path

from bundle_analyzer.commands import (
    COMMAND_NOT_EXECUTABLE,
    COMMAND_NOT_FOUND,
    printable_command,
    run_command,
)


def test_output_is_combined_and_trimmed() -> None:
    result = run_command(
        [sys.executable, "-c", "import sys; print('out'); sys.stderr.write('err\\n')"]
    )
    assert result.ok
    assert "out" in result.output
    assert "err" in result.output
    assert not result.output.endswith("\n")


def test_non_zero_exit_is_returned() -> None:
    result = run_command([sys.executable, "-c", "raise SystemExit(3)"])
    assert result.returncode == 3
    assert not result.ok


def test_missing_executable_is_127() -> None:
    result = run_command(["definitely-not-a-real-binary-xyz"])
    assert result.returncode == COMMAND_NOT_FOUND


def test_extra_env_and_cwd(tmp_path: Path) -> None:
    result = run_command(
        [sys.executable, "-c", "import os; print(os.environ['GH_TOKEN'], os.getcwd())"],
        env={"GH_TOKEN": "abc"},
        cwd=tmp_path,
    )
    assert result.output.split()[0] == "abc"
    assert Path(result.output.split()[1]).resolve() == tmp_path.resolve()


def test_printable_command_quotes_arguments() -> None:
    assert printable_command(["gh", "pr", "comment", "7", "--body-file", "my report.md"]) == (
        "gh pr comment 7 --body-file 'my report.md'"
    )


def test_non_executable_file_is_126(tmp_path: Path) -> None:
    script = tmp_path / "envman"
    script.write_text("#!/bin/sh\necho hi\n", encoding="utf-8")
    script.chmod(0o644)

    result = run_command([str(script), "add"])
    assert result.returncode == COMMAND_NOT_EXECUTABLE
    assert not result.ok


def test_undecodable_output_is_replaced() -> None:
    result = run_command(
        [sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'\\xff\\xfe bad')"]
    )
    assert result.ok
    assert result.output.endswith("bad")
    assert "\ufffd" in result.output
