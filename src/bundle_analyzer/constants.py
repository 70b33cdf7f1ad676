from __future__ import annotations

from enum import Enum


class ExitCode(int, Enum):
    """Process exit codes."""

    SUCCESS = 0
    FAILURE = 1


BYTES_PER_MB = 1024 * 1024

PLUGIN_NAME = "bundle-inspector"
PLUGIN_SOURCE = "https://github.com/bitrise-io/bitrise-plugins-bundle-inspector.git"

# Fallback used for the PR comment when no markdown path was located or deployed.
DEFAULT_MARKDOWN_REPORT = "analysis.md"


class OutputKey:
    """Names of the exported step outputs."""

    REPORT_PATH = "BUNDLE_ANALYZER_REPORT_PATH"
    HTML_PATH = "BUNDLE_ANALYZER_HTML_PATH"
    JSON_PATH = "BUNDLE_ANALYZER_JSON_PATH"
    SIZE_BYTES = "BUNDLE_SIZE_BYTES"
    SIZE_MB = "BUNDLE_SIZE_MB"
    POTENTIAL_SAVINGS_BYTES = "BUNDLE_POTENTIAL_SAVINGS_BYTES"
    COMMENT_POSTED = "BUNDLE_GITHUB_COMMENT_POSTED"
