# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the mdmaudit analysis pipeline."""

from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..extraction.adapters import DEFAULT_COMPLIANCE_EXCLUDED_KEYS, DEFAULT_PAYLOAD_EXCLUDED_KEYS
from ..metadata import DEFAULT_METADATA_SUFFIX
from ..types import PATH_SEPARATOR

DEFAULT_EXTENSIONS: Final[tuple[str, ...]] = (".json", ".mobileconfig", ".plist")

ReportFormat = Literal["table", "json", "csv"]


def default_parallel_jobs() -> int:
    """Return a CPU count scaled down for concurrent document parsing.

    Returns:
        int: Roughly 75% of available CPU cores, never less than one.
    """
    cores = os.cpu_count() or 1
    return max(1, math.floor(cores * 0.75))


class DiscoveryConfig(BaseModel):
    """Which files under the analysis root are treated as documents."""

    model_config = ConfigDict(validate_assignment=True)

    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    excludes: list[str] = Field(default_factory=list)
    metadata_suffix: str = DEFAULT_METADATA_SUFFIX
    follow_symlinks: bool = False

    @field_validator("extensions")
    @classmethod
    def _normalise_extensions(cls, value: list[str]) -> list[str]:
        """Lower-case extensions and ensure each starts with a dot."""
        normalised: list[str] = []
        for raw in value:
            ext = raw.strip().lower()
            if not ext:
                continue
            normalised.append(ext if ext.startswith(".") else f".{ext}")
        return normalised


class ExtractionConfig(BaseModel):
    """Knobs for the format adapters."""

    model_config = ConfigDict(validate_assignment=True)

    compliance_excluded_keys: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_COMPLIANCE_EXCLUDED_KEYS),
    )
    payload_excluded_keys: list[str] = Field(default_factory=lambda: sorted(DEFAULT_PAYLOAD_EXCLUDED_KEYS))
    path_separator: str = PATH_SEPARATOR


class ExecutionConfig(BaseModel):
    """Parallelism and per-file limits."""

    model_config = ConfigDict(validate_assignment=True)

    jobs: int = Field(default_factory=default_parallel_jobs, ge=1)
    file_timeout: float | None = Field(default=None, gt=0)


class OutputConfig(BaseModel):
    """Configuration for controlling console output and report files."""

    model_config = ConfigDict(validate_assignment=True)

    format: ReportFormat = "table"
    output: Path | None = None
    emoji: bool = True
    color: bool = True
    verbose: bool = False
    conflicts_only: bool = False
    fail_on_conflict: bool = False


class Config(BaseModel):
    """Primary configuration container used by the pipeline and CLI."""

    model_config = ConfigDict(validate_assignment=True)

    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


__all__ = [
    "Config",
    "DEFAULT_EXTENSIONS",
    "DiscoveryConfig",
    "ExecutionConfig",
    "ExtractionConfig",
    "OutputConfig",
    "ReportFormat",
    "default_parallel_jobs",
]
