from __future__ import annotations

import json
from pathlib import Path

import pytest

from bundle_analyzer.errors import MetricsError
from bundle_analyzer.metrics import format_mb, parse_json_report


def _write_report(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "analysis.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_metrics_from_report(tmp_path: Path) -> None:
    path = _write_report(
        tmp_path,
        {
            "artifact_info": {"path": "app.ipa", "size": 44371200, "size_formatted": "42.3 MB"},
            "potential_savings": 9175040,
            "optimizations": [{"category": "duplicates"}],
        },
    )
    metrics = parse_json_report(path)
    assert metrics.size_bytes == 44371200
    assert metrics.size_mb == "42.31"
    assert metrics.potential_savings_bytes == 9175040


def test_missing_fields_default_to_zero(tmp_path: Path) -> None:
    metrics = parse_json_report(_write_report(tmp_path, {}))
    assert metrics.size_bytes == 0
    assert metrics.size_mb == "0.00"
    assert metrics.potential_savings_bytes == 0


def test_invalid_json_raises_metrics_error(tmp_path: Path) -> None:
    path = tmp_path / "analysis.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(MetricsError, match="failed to parse"):
        parse_json_report(path)


def test_wrong_types_raise_metrics_error(tmp_path: Path) -> None:
    path = _write_report(tmp_path, {"artifact_info": {"size": "big"}})
    with pytest.raises(MetricsError):
        parse_json_report(path)


def test_unreadable_report_raises_metrics_error(tmp_path: Path) -> None:
    with pytest.raises(MetricsError, match="failed to read"):
        parse_json_report(tmp_path / "missing.json")


def test_format_mb() -> None:
    assert format_mb(52428800) == "50.00"
    assert format_mb(0) == "0.00"


def test_format_mb_truncates() -> None:
    assert format_mb(44371200) == "42.31"
    assert format_mb(2 * 1024 * 1024 - 1) == "1.99"
