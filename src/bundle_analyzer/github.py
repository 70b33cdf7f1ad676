from __future__ import annotations

import os
from typing import Optional

import requests

GITHUB_API = os.environ.get("GITHUB_API_URL", "https://api.github.com")
DEFAULT_HTTP_TIMEOUT_SECONDS = float(os.environ.get("BUNDLE_ANALYZER_HTTP_TIMEOUT_SECONDS", "15"))


class GitHubClient:
    def __init__(self, token: str, repo: str, session: Optional[requests.Session] = None):
        self.token = token
        self.repo = repo
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "bundle-analyzer-step",
        })

    def create_or_update_pr_comment(self, pr_number: str, body: str, marker_prefix: str) -> Optional[str]:
        """Idempotent update: search recent comments for marker prefix; update if found else create."""
        url = f"{GITHUB_API}/repos/{self.repo}/issues/{pr_number}/comments"
        r = self.session.get(url, params={"per_page": 100}, timeout=DEFAULT_HTTP_TIMEOUT_SECONDS)
        r.raise_for_status()
        for c in r.json():
            if marker_prefix in (c.get("body") or ""):
                patch_url = f"{GITHUB_API}/repos/{self.repo}/issues/comments/{c['id']}"
                pr = self.session.patch(
                    patch_url,
                    json={"body": body},
                    timeout=DEFAULT_HTTP_TIMEOUT_SECONDS,
                )
                pr.raise_for_status()
                try:
                    return (pr.json() or {}).get("html_url")
                except Exception:
                    return None
        cr = self.session.post(url, json={"body": body}, timeout=DEFAULT_HTTP_TIMEOUT_SECONDS)
        cr.raise_for_status()
        try:
            return (cr.json() or {}).get("html_url")
        except Exception:
            return None
