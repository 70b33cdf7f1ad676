from __future__ import annotations

import os
import re
import uuid
from dataclasses import dataclass
from typing import Mapping, Optional

_REPO_URL_RE = re.compile(
    r"github\.com[:/](?P<owner>[^/:]+)/(?P<name>[^/]+?)(?:\.git)?/?$",
    re.IGNORECASE,
)


def repository_from_url(url: str) -> Optional[str]:
    """Extract "owner/name" from an https or ssh GitHub remote URL."""
    match = _REPO_URL_RE.search((url or "").strip())
    if not match:
        return None
    return f"{match.group('owner')}/{match.group('name')}"


@dataclass(frozen=True)
class StepEnvironment:
    """Immutable view of the CI variables the step reads."""

    # Artifact sources, in detection priority order after the explicit input
    ipa_path: str
    aab_path: str
    apk_path: str

    deploy_dir: str
    pull_request: str

    debug: bool
    run_id: str

    git_repository_url: str = ""
    github_output: str = ""

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "StepEnvironment":
        env = os.environ if environ is None else environ
        return cls(
            ipa_path=env.get("BITRISE_IPA_PATH", "").strip(),
            aab_path=env.get("BITRISE_AAB_PATH", "").strip(),
            apk_path=env.get("BITRISE_APK_PATH", "").strip(),
            deploy_dir=env.get("BITRISE_DEPLOY_DIR", "").strip(),
            pull_request=env.get("BITRISE_PULL_REQUEST", "").strip(),
            debug=env.get("BITRISE_STEP_DEBUG", "").strip().lower() == "true",
            run_id=env.get("BITRISE_BUILD_SLUG") or str(uuid.uuid4()),
            git_repository_url=env.get("GIT_REPOSITORY_URL", ""),
            github_output=env.get("GITHUB_OUTPUT", ""),
        )

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request not in ("", "false")

    @property
    def pr_number(self) -> Optional[str]:
        return self.pull_request if self.is_pull_request else None

    @property
    def repository(self) -> Optional[str]:
        return repository_from_url(self.git_repository_url)
