from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Protocol

from ..commands import run_command
from ..constants import OutputKey
from ..context import StepEnvironment
from ..errors import OutputExportError
from ..logging import StepLogger
from ..models import BundleMetrics, ReportPaths


class OutputSink(Protocol):
    def set_output(self, key: str, value: str) -> None: ...


class EnvmanOutputSink:
    """Exports outputs through `envman add`, visible to later steps as env vars."""

    def set_output(self, key: str, value: str) -> None:
        result = run_command(["envman", "add", "--key", key, "--value", value])
        if not result.ok:
            raise OutputExportError(
                f"envman add failed for {key} (exit {result.returncode}): {result.output}"
            )


class GitHubOutputSink:
    """Appends `key=value` lines to the $GITHUB_OUTPUT file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def set_output(self, key: str, value: str) -> None:
        if "\n" in value or "\r" in value:
            raise OutputExportError(f"multi-line value not supported for {key}")
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(f"{key}={value}\n")
        except OSError as exc:
            raise OutputExportError(f"failed to write {key} to {self.path}: {exc}") from exc


def resolve_output_sink(env: StepEnvironment) -> OutputSink:
    if env.github_output:
        return GitHubOutputSink(env.github_output)
    return EnvmanOutputSink()


def build_outputs(
    metrics: BundleMetrics,
    paths: ReportPaths,
    comment_posted: bool,
) -> Dict[str, str]:
    return {
        OutputKey.REPORT_PATH: paths.markdown,
        OutputKey.HTML_PATH: paths.html,
        OutputKey.JSON_PATH: paths.json,
        OutputKey.SIZE_BYTES: str(metrics.size_bytes),
        OutputKey.SIZE_MB: metrics.size_mb,
        OutputKey.POTENTIAL_SAVINGS_BYTES: str(metrics.potential_savings_bytes),
        OutputKey.COMMENT_POSTED: "true" if comment_posted else "false",
    }


def export_outputs(
    sink: OutputSink,
    metrics: BundleMetrics,
    paths: ReportPaths,
    comment_posted: bool,
    logger: StepLogger,
) -> List[str]:
    """Export every output; returns the keys that failed."""
    failed: List[str] = []
    for key, value in build_outputs(metrics, paths, comment_posted).items():
        try:
            sink.set_output(key, value)
        except OutputExportError as exc:
            logger.warning(f"Failed to export {key}", error=str(exc))
            failed.append(key)
            continue
        logger.info(f"Exported: {key}={value}")
    return failed
