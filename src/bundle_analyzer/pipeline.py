from __future__ import annotations

from pathlib import Path
from typing import Optional

import requests

from .artifact import detect_artifact, require_artifact_exists
from .comment import maybe_post_comment
from .config import StepConfig
from .context import StepEnvironment
from .errors import MetricsError
from .gate import check_size_threshold
from .logging import StepLogger
from .metrics import parse_json_report
from .models import BundleMetrics, PipelineResult, ReportFormat
from .plugin import ensure_plugin_installed, run_bundle_inspector
from .publish import OutputSink, deploy_reports, export_outputs
from .reports import find_generated_reports


def run_pipeline(
    config: StepConfig,
    env: StepEnvironment,
    sink: OutputSink,
    logger: StepLogger,
    work_dir: Optional[Path] = None,
    session: Optional[requests.Session] = None,
) -> PipelineResult:
    """
    Run the step end to end.

    Fatal conditions raise a BundleAnalyzerError subclass; everything else is
    logged as a warning and the run continues with defaults.
    """
    work_dir = work_dir or Path.cwd()

    formats, unknown = config.formats()
    for token in unknown:
        logger.warning(f"Ignoring unsupported output format: {token}")
    if not formats:
        logger.warning(
            "output_formats has no supported format, using the plugin default",
            output_formats=config.output_formats,
        )

    with logger.stage("artifact"):
        artifact_path = detect_artifact(config, env, logger)
        require_artifact_exists(artifact_path)
    logger.info(f"Analyzing artifact: {artifact_path}")

    if config.install_plugin:
        with logger.stage("plugin_install"):
            ensure_plugin_installed(logger, source=config.plugin_source)

    with logger.stage("analyze"):
        logger.info("Running bundle-inspector analysis...")
        run_bundle_inspector(artifact_path, formats, logger, work_dir=work_dir, verbose=env.debug)

    logger.info("Locating generated report files...")
    generated = find_generated_reports(formats, logger, work_dir=work_dir)

    result = PipelineResult(artifact_path=artifact_path, formats=tuple(formats))

    if ReportFormat.JSON in formats and generated.json:
        logger.info("Parsing JSON report for metrics...")
        try:
            result.metrics = parse_json_report(generated.json)
        except MetricsError as exc:
            logger.warning("Failed to parse JSON report (will use empty metrics)", error=str(exc))
            result.metrics = BundleMetrics()

    if env.deploy_dir:
        with logger.stage("deploy"):
            logger.info(f"Deploying reports to: {env.deploy_dir}")
            result.report_paths = deploy_reports(generated, env.deploy_dir, logger)
    else:
        logger.warning("BITRISE_DEPLOY_DIR not set, reports will remain in working directory")
        result.report_paths = generated

    result.comment_posted, result.comment_url = maybe_post_comment(
        config.post_github_comment,
        formats,
        env,
        result.report_paths.markdown,
        config.github_token.get_secret_value(),
        logger,
        backend=config.comment_backend,
        repository=config.repository or None,
        work_dir=work_dir,
        session=session,
    )

    logger.info("Exporting outputs...")
    result.failed_outputs = export_outputs(
        sink, result.metrics, result.report_paths, result.comment_posted, logger
    )

    if config.fail_on_large_size and result.metrics.size_bytes > 0:
        check_size_threshold(config.fail_on_large_size, result.metrics.size_bytes, logger)

    return result
