# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the mdmaudit package."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .types import UNKNOWN_TYPE


class ConfigMetadata(BaseModel):
    """Human-facing identity of a configuration artifact."""

    model_config = ConfigDict(frozen=True)

    reference_id: str
    name: str
    type: str = UNKNOWN_TYPE


class SettingRecord(BaseModel):
    """One observed leaf setting occurrence inside a document.

    ``value`` keeps the raw typed value read from the document so reports can
    show it verbatim; comparison always goes through
    :func:`mdmaudit.normalize.normalize_value`.
    """

    model_config = ConfigDict(frozen=True)

    setting_id: str
    value: Any = None
    path: str
    source_file: str = ""
    reference_id: str = ""
    config_name: str = ""
    config_type: str = ""

    def with_source(self, source_file: str, metadata: ConfigMetadata) -> SettingRecord:
        """Return a copy of the record attributed to ``source_file``.

        Args:
            source_file: Document path relative to the analysis root.
            metadata: Resolved identity of the document.

        Returns:
            SettingRecord: New record carrying the source attribution.
        """

        return self.model_copy(
            update={
                "source_file": source_file,
                "reference_id": metadata.reference_id,
                "config_name": metadata.name,
                "config_type": metadata.type,
            }
        )


class DuplicateEntry(BaseModel):
    """A setting identifier declared by two or more distinct files.

    The four list fields are index-aligned: position ``i`` of each describes
    the same per-file occurrence.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    setting_id: str
    occurrence_count: int
    has_conflict: bool
    config_names: tuple[str, ...] = Field(default_factory=tuple)
    reference_ids: tuple[str, ...] = Field(default_factory=tuple)
    normalized_values: tuple[str, ...] = Field(default_factory=tuple)
    source_files: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def status(self) -> str:
        """Return ``"conflict"`` or ``"redundant"`` for display purposes."""

        return "conflict" if self.has_conflict else "redundant"


class FileWarning(BaseModel):
    """Non-fatal problem encountered while processing one document."""

    model_config = ConfigDict(frozen=True)

    source_file: str
    message: str


__all__ = [
    "ConfigMetadata",
    "DuplicateEntry",
    "FileWarning",
    "SettingRecord",
]
