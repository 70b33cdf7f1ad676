from __future__ import annotations

import math
from typing import Optional

from .constants import BYTES_PER_MB
from .errors import SizeThresholdExceededError
from .logging import StepLogger
from .metrics import format_mb


def parse_threshold_mb(value: str) -> Optional[float]:
    """Parse a megabyte threshold; None for anything unusable."""
    try:
        threshold = float((value or "").strip())
    except ValueError:
        return None
    if not math.isfinite(threshold) or threshold < 0:
        return None
    return threshold


def check_size_threshold(threshold: str, size_bytes: int, logger: StepLogger) -> bool:
    """
    Fail when the bundle is strictly larger than the threshold.

    Returns True when the check ran and passed, False when it was skipped.
    """
    if not threshold or size_bytes <= 0:
        return False

    threshold_mb = parse_threshold_mb(threshold)
    if threshold_mb is None:
        logger.warning(f"Invalid fail_on_large_size value: {threshold}")
        return False

    threshold_bytes = int(threshold_mb * BYTES_PER_MB)
    size_mb = format_mb(size_bytes)
    logger.info(f"Checking size threshold: {size_mb} MB / {threshold_mb:.2f} MB")

    if size_bytes > threshold_bytes:
        raise SizeThresholdExceededError(
            f"bundle size {size_mb} MB exceeds threshold {threshold_mb:.2f} MB"
        )

    logger.info("Bundle size is within threshold")
    return True
