from __future__ import annotations

import json
import os
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, TextIO


class StepLogger:
    """Structured JSON logger for CI step output."""

    def __init__(
        self,
        run_id: str,
        stream: Optional[TextIO] = None,
        annotations: Optional[bool] = None,
    ):
        self.run_id = run_id
        self._stream = stream
        if annotations is None:
            annotations = os.environ.get("GITHUB_ACTIONS", "").lower() == "true"
        self._annotations = annotations

    def info(self, message: str, **kwargs: Any) -> None:
        self._emit("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._emit("warning", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._emit("error", message, **kwargs)

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Context manager that tracks stage timing."""
        start = datetime.now(timezone.utc)
        self.info("stage_start", stage=name)
        status = "ok"
        try:
            yield
        except Exception as exc:
            status = "error"
            self.error("stage_error", stage=name, error=str(exc))
            raise
        finally:
            end = datetime.now(timezone.utc)
            duration_ms = int((end - start).total_seconds() * 1000)
            self.info("stage_end", stage=name, duration_ms=duration_ms, status=status)

    def _emit(self, level: str, message: str, **kwargs: Any) -> None:
        """Emit a JSON log line, plus a workflow annotation for warnings and errors."""
        stream = self._stream or sys.stderr
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "run_id": self.run_id,
            "message": message,
        }
        payload.update(self._sanitize(kwargs))

        stream.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")

        if self._annotations and level in ("error", "warning"):
            stream.write(f"::{level}::{_escape_workflow_command(message)}\n")
        stream.flush()

    @staticmethod
    def _sanitize(fields: Dict[str, Any]) -> Dict[str, Any]:
        redacted: Dict[str, Any] = {}
        for key, value in fields.items():
            if StepLogger._is_sensitive_key(key):
                redacted[key] = "***"
            else:
                redacted[key] = value
        return redacted

    @staticmethod
    def _is_sensitive_key(key: str) -> bool:
        lowered = key.lower()
        return any(token in lowered for token in ("token", "secret", "password", "api_key", "apikey"))


def _escape_workflow_command(value: str) -> str:
    return str(value).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
