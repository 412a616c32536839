# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cross-file duplicate and conflict detection over a :class:`CorpusIndex`."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .index import CorpusIndex
from .models import DuplicateEntry, SettingRecord
from .normalize import normalize_value


@dataclass(frozen=True, slots=True)
class DuplicateSummary:
    """Counts shown alongside a duplicate report."""

    total: int
    conflicts: int
    redundant: int


def _first_per_file(records: Sequence[SettingRecord]) -> list[SettingRecord]:
    """Return the first record of each distinct source file, in order."""

    seen: set[str] = set()
    representatives: list[SettingRecord] = []
    for record in records:
        if record.source_file in seen:
            continue
        seen.add(record.source_file)
        representatives.append(record)
    return representatives


def build_entry(setting_id: str, records: Sequence[SettingRecord]) -> DuplicateEntry | None:
    """Return the duplicate entry for one bucket, ``None`` when single-file.

    Args:
        setting_id: Identifier shared by ``records``.
        records: Bucket contents in file-processing order.

    Returns:
        DuplicateEntry | None: Entry describing the cross-file repetition, or
        ``None`` when every record comes from the same file.
    """

    representatives = _first_per_file(records)
    if len(representatives) <= 1:
        return None
    normalized = tuple(normalize_value(record.value) for record in representatives)
    return DuplicateEntry(
        setting_id=setting_id,
        occurrence_count=len(representatives),
        has_conflict=len(set(normalized)) > 1,
        config_names=tuple(record.config_name for record in representatives),
        reference_ids=tuple(record.reference_id for record in representatives),
        normalized_values=normalized,
        source_files=tuple(record.source_file for record in representatives),
    )


def detect_duplicates(index: CorpusIndex) -> list[DuplicateEntry]:
    """Return cross-file duplicates ranked by occurrence count.

    Args:
        index: Fully populated corpus index.

    Returns:
        list[DuplicateEntry]: Entries sorted by ``occurrence_count`` descending;
        ties keep the order in which setting identifiers were first indexed.
    """

    entries: list[DuplicateEntry] = []
    for setting_id, records in index.buckets():
        if len(records) < 2:
            continue
        entry = build_entry(setting_id, records)
        if entry is not None:
            entries.append(entry)
    # list.sort is stable, so equal counts stay in insertion order.
    entries.sort(key=lambda entry: entry.occurrence_count, reverse=True)
    return entries


def summarize(entries: Sequence[DuplicateEntry]) -> DuplicateSummary:
    """Return conflict/redundancy counts for ``entries``."""

    conflicts = sum(1 for entry in entries if entry.has_conflict)
    return DuplicateSummary(total=len(entries), conflicts=conflicts, redundant=len(entries) - conflicts)


__all__ = ["DuplicateSummary", "build_entry", "detect_duplicates", "summarize"]
