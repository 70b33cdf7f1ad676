from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional

CommentBackend = Literal["gh", "api"]


class ReportFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"
    HTML = "html"


class CommentPolicy(str, Enum):
    AUTO = "auto"
    YES = "yes"
    NO = "no"


@dataclass(frozen=True)
class ReportPaths:
    markdown: str = ""
    html: str = ""
    json: str = ""

    def present(self) -> dict[ReportFormat, str]:
        """Formats that have a path, in markdown/html/json order."""
        items = {
            ReportFormat.MARKDOWN: self.markdown,
            ReportFormat.HTML: self.html,
            ReportFormat.JSON: self.json,
        }
        return {fmt: path for fmt, path in items.items() if path}

    @classmethod
    def from_mapping(cls, paths: dict[ReportFormat, str]) -> "ReportPaths":
        return cls(
            markdown=paths.get(ReportFormat.MARKDOWN, ""),
            html=paths.get(ReportFormat.HTML, ""),
            json=paths.get(ReportFormat.JSON, ""),
        )


@dataclass(frozen=True)
class BundleMetrics:
    size_bytes: int = 0
    size_mb: str = "0.00"
    potential_savings_bytes: int = 0


@dataclass
class PipelineResult:
    artifact_path: str
    formats: tuple[ReportFormat, ...]
    metrics: BundleMetrics = field(default_factory=BundleMetrics)
    report_paths: ReportPaths = field(default_factory=ReportPaths)
    comment_posted: bool = False
    failed_outputs: list[str] = field(default_factory=list)
    comment_url: Optional[str] = None
