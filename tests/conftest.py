from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from bundle_analyzer.commands import CommandResult
from bundle_analyzer.context import StepEnvironment
from bundle_analyzer.logging import StepLogger

STEP_ENV_VARS = (
    "ARTIFACT_PATH",
    "OUTPUT_FORMATS",
    "POST_GITHUB_COMMENT",
    "GITHUB_TOKEN",
    "FAIL_ON_LARGE_SIZE",
    "INSTALL_PLUGIN",
    "PLUGIN_SOURCE",
    "COMMENT_BACKEND",
    "REPOSITORY",
    "BITRISE_IPA_PATH",
    "BITRISE_AAB_PATH",
    "BITRISE_APK_PATH",
    "BITRISE_DEPLOY_DIR",
    "BITRISE_PULL_REQUEST",
    "BITRISE_STEP_DEBUG",
    "BITRISE_BUILD_SLUG",
    "GIT_REPOSITORY_URL",
    "GITHUB_OUTPUT",
    "GITHUB_ACTIONS",
)

Handler = Callable[[Tuple[str, ...], Optional[Dict[str, str]], Optional[Path]], CommandResult]


@pytest.fixture(autouse=True)
def clean_step_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host CI environment out of config and context loading."""
    for name in STEP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.lower(), raising=False)


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(log_stream: io.StringIO) -> StepLogger:
    return StepLogger("test-run", stream=log_stream, annotations=False)


def make_env(**overrides: str) -> StepEnvironment:
    values = {
        "ipa_path": "",
        "aab_path": "",
        "apk_path": "",
        "deploy_dir": "",
        "pull_request": "",
        "debug": False,
        "run_id": "test-run",
    }
    values.update(overrides)
    return StepEnvironment(**values)


def ok(output: str = "") -> CommandResult:
    return CommandResult(args=(), returncode=0, output=output)


def failed(output: str = "", returncode: int = 1) -> CommandResult:
    return CommandResult(args=(), returncode=returncode, output=output)


class FakeCommands:
    """Records commands and answers them by matching the leading arguments."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Tuple[str, ...], Optional[Dict[str, str]], Optional[Path]]] = []
        self._handlers: List[Tuple[Tuple[str, ...], Handler]] = []

    def on(self, prefix: Sequence[str], result: CommandResult | Handler) -> None:
        if isinstance(result, CommandResult):
            fixed = result
            handler: Handler = lambda args, env, cwd: fixed
        else:
            handler = result
        self._handlers.insert(0, (tuple(prefix), handler))

    def __call__(self, args, env=None, cwd=None) -> CommandResult:  # noqa: ANN001
        argv = tuple(str(a) for a in args)
        self.calls.append((argv, dict(env) if env else None, cwd))
        for prefix, handler in self._handlers:
            if argv[: len(prefix)] == prefix:
                return handler(argv, env, cwd)
        return ok()

    def commands(self) -> List[Tuple[str, ...]]:
        return [argv for argv, _, _ in self.calls]


@pytest.fixture
def fake_commands(monkeypatch: pytest.MonkeyPatch) -> FakeCommands:
    fake = FakeCommands()
    monkeypatch.setattr("bundle_analyzer.plugin.run_command", fake)
    monkeypatch.setattr("bundle_analyzer.comment.run_command", fake)
    monkeypatch.setattr("bundle_analyzer.publish.outputs.run_command", fake)
    return fake
