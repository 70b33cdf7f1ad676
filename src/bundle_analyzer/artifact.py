from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import StepConfig
from .context import StepEnvironment
from .errors import ArtifactNotFoundError
from .logging import StepLogger


def detect_artifact(
    config: StepConfig,
    env: StepEnvironment,
    logger: Optional[StepLogger] = None,
) -> str:
    """Resolve the artifact: explicit input, then IPA, AAB, APK path variables."""
    if config.artifact_path:
        return config.artifact_path

    candidates = (
        ("BITRISE_IPA_PATH", env.ipa_path, "iOS app archive"),
        ("BITRISE_AAB_PATH", env.aab_path, "Android App Bundle"),
        ("BITRISE_APK_PATH", env.apk_path, "Android APK"),
    )
    for variable, path, kind in candidates:
        if path:
            if logger:
                logger.info(f"Auto-detected {kind} from {variable}", artifact=path)
            return path

    raise ArtifactNotFoundError(
        "no artifact found: provide artifact_path input or ensure "
        "BITRISE_IPA_PATH, BITRISE_AAB_PATH, or BITRISE_APK_PATH is set"
    )


def require_artifact_exists(path: str) -> Path:
    artifact = Path(path)
    if not artifact.exists():
        raise ArtifactNotFoundError(f"artifact file does not exist: {path}")
    return artifact
