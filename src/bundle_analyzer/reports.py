from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

from .logging import StepLogger
from .models import ReportFormat, ReportPaths


@dataclass(frozen=True)
class ReportLookup:
    fixed_name: str
    pattern: str


# Newer bundle-inspector builds write analysis.<ext>; older ones write
# bundle-analysis-<timestamp>.<ext>.
REPORT_LOOKUP: Dict[ReportFormat, ReportLookup] = {
    ReportFormat.TEXT: ReportLookup("analysis.txt", "bundle-analysis-*.txt"),
    ReportFormat.JSON: ReportLookup("analysis.json", "bundle-analysis-*.json"),
    ReportFormat.MARKDOWN: ReportLookup("analysis.md", "bundle-analysis-*.md"),
    ReportFormat.HTML: ReportLookup("analysis.html", "bundle-analysis-*.html"),
}

# Formats tracked in ReportPaths; text output is printed by the plugin.
FILE_FORMATS = (ReportFormat.MARKDOWN, ReportFormat.HTML, ReportFormat.JSON)


def find_report(work_dir: Path, fmt: ReportFormat) -> Optional[Path]:
    lookup = REPORT_LOOKUP[fmt]
    fixed = work_dir / lookup.fixed_name
    if fixed.is_file():
        return fixed
    matches = sorted(p for p in work_dir.glob(lookup.pattern) if p.is_file())
    return matches[0] if matches else None


def find_generated_reports(
    formats: Iterable[ReportFormat],
    logger: StepLogger,
    work_dir: Optional[Path] = None,
) -> ReportPaths:
    """Locate the report file for each requested format; missing files are warnings."""
    base = work_dir or Path.cwd()
    requested = set(formats)
    found: Dict[ReportFormat, str] = {}
    for fmt in FILE_FORMATS:
        if fmt not in requested:
            continue
        path = find_report(base, fmt)
        if path is None:
            lookup = REPORT_LOOKUP[fmt]
            logger.warning(
                f"No {fmt.value} report found",
                fixed_name=lookup.fixed_name,
                pattern=lookup.pattern,
                work_dir=str(base),
            )
            continue
        logger.info(f"Found: {path}")
        found[fmt] = str(path)
    return ReportPaths.from_mapping(found)
