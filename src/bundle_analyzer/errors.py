from __future__ import annotations

from .constants import ExitCode


class BundleAnalyzerError(Exception):
    """Base exception for all bundle analyzer errors."""

    exit_code: ExitCode = ExitCode.FAILURE


class ConfigError(BundleAnalyzerError):
    """Step inputs failed validation."""


class ArtifactNotFoundError(BundleAnalyzerError):
    """No artifact could be resolved, or the resolved file is missing."""


class PluginError(BundleAnalyzerError):
    """bundle-inspector could not be installed or the analysis failed."""


class MetricsError(BundleAnalyzerError):
    """JSON report could not be read or decoded (non-fatal)."""


class DeployError(BundleAnalyzerError):
    """Deploy directory could not be created."""


class CommentError(BundleAnalyzerError):
    """Posting the PR comment failed."""


class MarkdownReportNotFoundError(CommentError):
    """Markdown report to post is missing on disk."""


class OutputExportError(BundleAnalyzerError):
    """A single step output could not be exported (non-fatal)."""


class SizeThresholdExceededError(BundleAnalyzerError):
    """Bundle is larger than the configured threshold."""
