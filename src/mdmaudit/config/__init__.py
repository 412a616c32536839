# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration models and loaders."""

from __future__ import annotations

from .files import ConfigFile
from .loader import PROJECT_CONFIG_NAME, ConfigLoader, load_config
from .models import (
    DEFAULT_EXTENSIONS,
    Config,
    DiscoveryConfig,
    ExecutionConfig,
    ExtractionConfig,
    OutputConfig,
    ReportFormat,
    default_parallel_jobs,
)

__all__ = [
    "Config",
    "ConfigFile",
    "ConfigLoader",
    "DEFAULT_EXTENSIONS",
    "DiscoveryConfig",
    "ExecutionConfig",
    "ExtractionConfig",
    "OutputConfig",
    "PROJECT_CONFIG_NAME",
    "ReportFormat",
    "default_parallel_jobs",
    "load_config",
]
