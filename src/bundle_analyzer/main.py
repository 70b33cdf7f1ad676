from __future__ import annotations

import sys

from . import __version__
from .config import StepConfig
from .constants import ExitCode
from .context import StepEnvironment
from .errors import BundleAnalyzerError, ConfigError
from .logging import StepLogger
from .pipeline import run_pipeline
from .publish import resolve_output_sink


def main() -> int:
    """Main entry point."""
    env = StepEnvironment.from_environment()
    logger = StepLogger(env.run_id)

    try:
        config = StepConfig()
    except Exception as exc:
        logger.error(f"Failed to parse configuration: {exc}")
        return int(ConfigError.exit_code)

    logger.info(
        "Bundle Analyzer Step",
        version=__version__,
        artifact_path=config.artifact_path,
        output_formats=config.output_formats,
        post_github_comment=config.post_github_comment.value,
        fail_on_large_size=config.fail_on_large_size,
        install_plugin=config.install_plugin,
        comment_backend=config.comment_backend,
    )

    try:
        result = run_pipeline(config, env, resolve_output_sink(env), logger)
    except BundleAnalyzerError as exc:
        logger.error(str(exc), error_type=type(exc).__name__)
        return int(exc.exit_code)

    logger.info(
        "Bundle analysis completed successfully",
        size_bytes=result.metrics.size_bytes,
        size_mb=result.metrics.size_mb,
        comment_posted=result.comment_posted,
    )
    return int(ExitCode.SUCCESS)


if __name__ == "__main__":
    sys.exit(main())
