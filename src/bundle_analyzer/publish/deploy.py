from __future__ import annotations

import shutil
from pathlib import Path
from typing import Dict

from ..errors import DeployError
from ..logging import StepLogger
from ..models import ReportFormat, ReportPaths


def deploy_reports(paths: ReportPaths, deploy_dir: str | Path, logger: StepLogger) -> ReportPaths:
    """
    Copy located reports into the deploy directory.

    Files in the deploy directory are attached to the build as artifacts.
    Returns the deployed paths; a report that fails to copy keeps an empty path.
    """
    target_dir = Path(deploy_dir)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DeployError(f"failed to create deploy directory {target_dir}: {exc}") from exc

    deployed: Dict[ReportFormat, str] = {}
    for fmt, src in paths.present().items():
        dst = target_dir / Path(src).name
        if dst.resolve() == Path(src).resolve():
            logger.info(f"Already in deploy directory: {dst}")
            deployed[fmt] = str(dst)
            continue
        try:
            shutil.copyfile(src, dst)
        except OSError as exc:
            logger.warning(f"Failed to deploy {src}", format=fmt.value, error=str(exc))
            continue
        logger.info(f"Deployed: {dst}")
        deployed[fmt] = str(dst)

    return ReportPaths.from_mapping(deployed)
