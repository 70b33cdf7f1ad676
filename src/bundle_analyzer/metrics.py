from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from .constants import BYTES_PER_MB
from .errors import MetricsError
from .models import BundleMetrics


class ArtifactInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    size: int = 0
    size_formatted: str = ""


class BundleReport(BaseModel):
    """Subset of the bundle-inspector JSON report this step consumes."""

    model_config = ConfigDict(extra="ignore")

    artifact_info: ArtifactInfo = ArtifactInfo()
    potential_savings: int = 0


def format_mb(size_bytes: int) -> str:
    """Megabytes truncated (not rounded) to two decimal places."""
    megabytes = Decimal(size_bytes) / Decimal(BYTES_PER_MB)
    return str(megabytes.quantize(Decimal("0.01"), rounding=ROUND_DOWN))


def parse_json_report(json_path: str | Path) -> BundleMetrics:
    try:
        data = Path(json_path).read_bytes()
    except OSError as exc:
        raise MetricsError(f"failed to read JSON report: {exc}") from exc

    try:
        report = BundleReport.model_validate_json(data)
    except ValidationError as exc:
        raise MetricsError(f"failed to parse JSON report: {exc}") from exc

    size = report.artifact_info.size
    return BundleMetrics(
        size_bytes=size,
        size_mb=format_mb(size),
        potential_savings_bytes=report.potential_savings,
    )
