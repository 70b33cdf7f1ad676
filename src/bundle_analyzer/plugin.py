from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .commands import CommandResult, printable_command, run_command
from .constants import PLUGIN_NAME, PLUGIN_SOURCE
from .errors import PluginError
from .logging import StepLogger
from .models import ReportFormat


def _run_logged(
    args: Sequence[str],
    logger: StepLogger,
    cwd: Optional[Path] = None,
) -> CommandResult:
    logger.info(f"$ {printable_command(args)}")
    return run_command(args, cwd=cwd)


def ensure_plugin_installed(logger: StepLogger, source: str = PLUGIN_SOURCE) -> bool:
    """
    Install bundle-inspector unless `bitrise plugin list` already reports it.

    Returns True when an install was performed.
    """
    logger.info(f"Checking for {PLUGIN_NAME} plugin...")
    listing = run_command(["bitrise", "plugin", "list"])
    if not listing.ok:
        raise PluginError(
            f"failed to check installed plugins (exit {listing.returncode}): {listing.output}"
        )

    if PLUGIN_NAME in listing.output:
        logger.info(f"{PLUGIN_NAME} plugin is already installed")
        return False

    logger.warning(f"{PLUGIN_NAME} plugin not found, installing...", source=source)
    result = _run_logged(["bitrise", "plugin", "install", source], logger)
    if result.output:
        logger.info(result.output)
    if not result.ok:
        raise PluginError(f"failed to install {PLUGIN_NAME} plugin (exit {result.returncode})")

    logger.info(f"{PLUGIN_NAME} plugin installed successfully")
    return True


def run_bundle_inspector(
    artifact_path: str,
    formats: Sequence[ReportFormat],
    logger: StepLogger,
    work_dir: Optional[Path] = None,
    verbose: bool = False,
) -> CommandResult:
    """
    Run the analysis; reports are written into `work_dir`.

    With no formats the `-o` flag is left out and the plugin picks its default.
    """
    args = ["bitrise", f":{PLUGIN_NAME}", "analyze", artifact_path]
    if formats:
        args += ["-o", ",".join(fmt.value for fmt in formats)]
    result = _run_logged(args, logger, cwd=work_dir)

    if not result.ok:
        if result.output:
            logger.info(result.output)
        raise PluginError(f"{PLUGIN_NAME} failed (exit {result.returncode})")

    # Located report files are logged separately; raw output only in debug runs.
    if verbose and result.output:
        logger.info(result.output)
    return result
