from __future__ import annotations

import os
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

# Shell conventions for "found but not executable" and "command not found".
COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    args: tuple[str, ...]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def printable_command(args: Sequence[str]) -> str:
    return shlex.join(str(a) for a in args)


def run_command(
    args: Sequence[str],
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> CommandResult:
    """
    Run a command to completion and capture its combined, trimmed output.

    `env` entries are added on top of the current process environment.
    A missing executable is reported as exit code 127, any other launch
    failure as 126, rather than raised. Undecodable output bytes are replaced.
    """
    argv = tuple(str(a) for a in args)
    child_env = None
    if env:
        child_env = {**os.environ, **env}
    try:
        proc = subprocess.run(
            list(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            env=child_env,
            cwd=str(cwd) if cwd else None,
            check=False,
        )
    except FileNotFoundError as exc:
        return CommandResult(args=argv, returncode=COMMAND_NOT_FOUND, output=str(exc))
    except OSError as exc:
        return CommandResult(args=argv, returncode=COMMAND_NOT_EXECUTABLE, output=str(exc))
    return CommandResult(args=argv, returncode=proc.returncode, output=(proc.stdout or "").strip())
