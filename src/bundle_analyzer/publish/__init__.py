from __future__ import annotations

from .deploy import deploy_reports
from .outputs import (
    EnvmanOutputSink,
    GitHubOutputSink,
    OutputSink,
    export_outputs,
    resolve_output_sink,
)

__all__ = [
    "EnvmanOutputSink",
    "GitHubOutputSink",
    "OutputSink",
    "deploy_reports",
    "export_outputs",
    "resolve_output_sink",
]
