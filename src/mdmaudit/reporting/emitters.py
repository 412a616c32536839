# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Emit machine-readable reports for analysis results."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable
from typing import Final

from ..models import DuplicateEntry
from ..pipeline import AnalysisResult

CSV_COLUMNS: Final[tuple[str, ...]] = (
    "SettingId",
    "OccurrenceCount",
    "HasConflict",
    "ConfigName",
    "ReferenceId",
    "Value",
    "SourceFile",
)


def select_entries(result: AnalysisResult, *, conflicts_only: bool = False) -> tuple[DuplicateEntry, ...]:
    """Return the duplicates to report, optionally limited to conflicts."""

    if not conflicts_only:
        return result.duplicates
    return tuple(entry for entry in result.duplicates if entry.has_conflict)


def build_payload(result: AnalysisResult, *, conflicts_only: bool = False) -> dict[str, object]:
    """Return the JSON-ready report payload for ``result``."""

    summary = result.summary
    return {
        "root": str(result.root),
        "filesScanned": len(result.files),
        "recordCount": result.record_count,
        "warnings": [{"sourceFile": item.source_file, "message": item.message} for item in result.warnings],
        "summary": {
            "duplicates": summary.total,
            "conflicts": summary.conflicts,
            "redundant": summary.redundant,
        },
        "duplicates": [
            entry.model_dump(mode="json", by_alias=True)
            for entry in select_entries(result, conflicts_only=conflicts_only)
        ],
    }


def render_json(result: AnalysisResult, *, conflicts_only: bool = False) -> str:
    """Return ``result`` serialised as an indented JSON document."""

    return json.dumps(build_payload(result, conflicts_only=conflicts_only), indent=2, ensure_ascii=False)


def _csv_rows(entries: Iterable[DuplicateEntry]) -> Iterable[tuple[object, ...]]:
    for entry in entries:
        occurrences = zip(entry.config_names, entry.reference_ids, entry.normalized_values, entry.source_files)
        for name, reference_id, value, source_file in occurrences:
            yield (
                entry.setting_id,
                entry.occurrence_count,
                "true" if entry.has_conflict else "false",
                name,
                reference_id,
                value,
                source_file,
            )


def render_csv(result: AnalysisResult, *, conflicts_only: bool = False) -> str:
    """Return one CSV row per (duplicate, file occurrence) pair."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    writer.writerows(_csv_rows(select_entries(result, conflicts_only=conflicts_only)))
    return buffer.getvalue()


__all__ = ["CSV_COLUMNS", "build_payload", "render_csv", "render_json", "select_entries"]
