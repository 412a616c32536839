# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while analysing configuration documents."""

from __future__ import annotations

from pathlib import Path


class MdmAuditError(RuntimeError):
    """Base class for errors raised by the analysis engine."""


class AnalysisRootError(MdmAuditError):
    """Raised when the analysis root does not exist or is not a directory."""

    def __init__(self, root: Path) -> None:
        """Create the error for the offending ``root``.

        Args:
            root: Root directory requested by the caller.
        """

        super().__init__(f"analysis root not found: {root}")
        self.root = root


class DocumentParseError(MdmAuditError):
    """Raised when a document cannot be deserialised at all."""

    def __init__(self, path: Path, reason: str) -> None:
        """Create the error for ``path`` with a short ``reason``.

        Args:
            path: Document that failed to parse.
            reason: Human-readable parser message.
        """

        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class AnalysisCancelled(MdmAuditError):
    """Raised when an external abort stops a run before duplicate detection."""


class ConfigError(MdmAuditError):
    """Raised when configuration input is invalid."""


class ManifestError(MdmAuditError):
    """Raised when a manifest file is missing or malformed."""


__all__ = (
    "AnalysisCancelled",
    "AnalysisRootError",
    "ConfigError",
    "DocumentParseError",
    "ManifestError",
    "MdmAuditError",
)
