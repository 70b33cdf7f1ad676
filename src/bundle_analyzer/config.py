from __future__ import annotations

from typing import List, Tuple

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import PLUGIN_SOURCE
from .models import CommentBackend, CommentPolicy, ReportFormat


class StepConfig(BaseSettings):
    """Configuration loaded from step inputs (exposed as environment variables)."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    artifact_path: str = Field(
        default="",
        description="Artifact to analyze. Auto-detected from IPA/AAB/APK path variables when empty.",
    )
    output_formats: str = Field(
        description="Comma-separated report formats: text, json, markdown, html",
    )
    post_github_comment: CommentPolicy = Field(
        default=CommentPolicy.AUTO,
        description="auto: post on PR builds, ignore failures; yes: failures are fatal; no: never post",
    )
    github_token: SecretStr = Field(default="", description="Token for posting PR comments")
    fail_on_large_size: str = Field(
        default="",
        description="Fail the build when the bundle is larger than this many MB",
    )

    install_plugin: bool = Field(
        default=True,
        description="Check for bundle-inspector and install it when missing",
    )
    plugin_source: str = Field(default=PLUGIN_SOURCE)
    comment_backend: CommentBackend = Field(
        default="gh",
        description="gh: post with the GitHub CLI; api: upsert a single comment via the REST API",
    )
    repository: str = Field(
        default="",
        description="owner/name used by the api comment backend (derived from GIT_REPOSITORY_URL when empty)",
    )

    @field_validator("post_github_comment", "comment_backend", mode="before")
    @classmethod
    def _normalize_lowercase(cls, value: str, info: ValidationInfo) -> str:
        if isinstance(value, str):
            # Unset inputs arrive as empty strings.
            return value.strip().lower() or cls.model_fields[info.field_name].default
        return value

    @field_validator("install_plugin", "plugin_source", mode="before")
    @classmethod
    def _empty_means_default(cls, value: object, info: ValidationInfo) -> object:
        if isinstance(value, str) and not value.strip():
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("output_formats")
    @classmethod
    def _require_formats(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("output_formats must not be empty")
        return value

    @field_validator("artifact_path", "fail_on_large_size", "repository", mode="before")
    @classmethod
    def _strip(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip()
        return value

    def formats(self) -> Tuple[List[ReportFormat], List[str]]:
        return parse_output_formats(self.output_formats)


def parse_output_formats(raw: str) -> Tuple[List[ReportFormat], List[str]]:
    """
    Split a comma-separated format list.

    Returns: (recognized formats in first-seen order, unrecognized tokens)
    """
    known = {fmt.value: fmt for fmt in ReportFormat}
    formats: List[ReportFormat] = []
    unknown: List[str] = []
    for token in (raw or "").split(","):
        name = token.strip().lower()
        if not name:
            continue
        fmt = known.get(name)
        if fmt is None:
            unknown.append(token.strip())
        elif fmt not in formats:
            formats.append(fmt)
    return formats, unknown
