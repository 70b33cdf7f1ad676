from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Tuple

import requests

from .commands import printable_command, run_command
from .constants import DEFAULT_MARKDOWN_REPORT
from .context import StepEnvironment
from .errors import CommentError, MarkdownReportNotFoundError
from .github import GitHubClient
from .logging import StepLogger
from .models import CommentBackend, CommentPolicy, ReportFormat

MARKER_PREFIX = "<!-- bundle-analyzer:report:"


def marker(repo_full_name: str, pr_number: str) -> str:
    return f"{MARKER_PREFIX}{repo_full_name}:{pr_number} -->"


def marker_prefix() -> str:
    return MARKER_PREFIX


def should_comment(
    policy: CommentPolicy,
    formats: Iterable[ReportFormat],
    env: StepEnvironment,
) -> bool:
    if policy is CommentPolicy.NO:
        return False
    if ReportFormat.MARKDOWN not in set(formats):
        return False
    return env.is_pull_request


def post_pr_comment(
    markdown_path: str | Path,
    token: str,
    pr_number: Optional[str],
    logger: StepLogger,
    *,
    backend: CommentBackend = "gh",
    repository: Optional[str] = None,
    work_dir: Optional[Path] = None,
    session: Optional[requests.Session] = None,
) -> Optional[str]:
    """
    Post the markdown report to the pull request.

    Returns the comment URL when the backend reports one.
    """
    if not token:
        raise CommentError("github_token is required for posting PR comments")
    if not pr_number or pr_number == "false":
        raise CommentError("not a pull request build")

    path = Path(markdown_path)
    if not path.is_file():
        raise MarkdownReportNotFoundError(f"markdown report not found: {path}")

    if backend == "api":
        return _post_via_api(path, token, pr_number, repository, logger, session)
    return _post_via_gh(path, token, pr_number, logger, work_dir)


def _post_via_gh(
    path: Path,
    token: str,
    pr_number: str,
    logger: StepLogger,
    work_dir: Optional[Path],
) -> Optional[str]:
    args = ["gh", "pr", "comment", pr_number, "--body-file", str(path)]
    logger.info(f"Posting comment to PR #{pr_number}...", command=printable_command(args))
    result = run_command(args, env={"GH_TOKEN": token}, cwd=work_dir)
    if result.output:
        logger.info(result.output)
    if not result.ok:
        raise CommentError(f"gh pr comment failed (exit {result.returncode})")
    # gh prints the comment URL as its last line on success.
    lines = result.output.splitlines()
    if lines and lines[-1].startswith("http"):
        return lines[-1].strip()
    return None


def _post_via_api(
    path: Path,
    token: str,
    pr_number: str,
    repository: Optional[str],
    logger: StepLogger,
    session: Optional[requests.Session],
) -> Optional[str]:
    if not repository or "/" not in repository:
        raise CommentError("repository (owner/name) is required for the api comment backend")

    try:
        report = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CommentError(f"failed to read markdown report: {exc}") from exc

    body = f"{report.rstrip()}\n\n{marker(repository, pr_number)}\n"
    logger.info(f"Posting comment to PR #{pr_number}...", repo=repository)
    gh = GitHubClient(token=token, repo=repository, session=session)
    try:
        return gh.create_or_update_pr_comment(pr_number, body, marker_prefix())
    except requests.RequestException as exc:
        raise CommentError(f"GitHub API comment failed: {exc}") from exc


def maybe_post_comment(
    policy: CommentPolicy,
    formats: Iterable[ReportFormat],
    env: StepEnvironment,
    markdown_path: str,
    token: str,
    logger: StepLogger,
    *,
    backend: CommentBackend = "gh",
    repository: Optional[str] = None,
    work_dir: Optional[Path] = None,
    session: Optional[requests.Session] = None,
) -> Tuple[bool, Optional[str]]:
    """
    Apply the comment policy.

    Returns (posted, comment_url). Failures propagate under policy "yes" and
    are downgraded to warnings under "auto".
    """
    formats = list(formats)
    if policy is CommentPolicy.NO or ReportFormat.MARKDOWN not in formats:
        return False, None
    if not should_comment(policy, formats, env):
        logger.info("Not a pull request build, skipping GitHub comment")
        return False, None

    logger.info("Pull request detected, preparing GitHub comment...", pr_number=env.pr_number)
    if not markdown_path:
        markdown_path = str((work_dir or Path.cwd()) / DEFAULT_MARKDOWN_REPORT)

    try:
        url = post_pr_comment(
            markdown_path,
            token,
            env.pr_number,
            logger,
            backend=backend,
            repository=repository or env.repository,
            work_dir=work_dir,
            session=session,
        )
    except CommentError as exc:
        if policy is CommentPolicy.YES:
            raise
        logger.warning(
            "Failed to post GitHub comment (non-fatal in auto mode)", error=str(exc)
        )
        return False, None

    logger.info("GitHub PR comment posted successfully", url=url)
    return True, url
