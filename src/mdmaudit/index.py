# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Corpus-wide index of setting occurrences keyed by setting identifier."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import SettingRecord


class CorpusIndex:
    """Accumulate :class:`SettingRecord` objects in file-processing order.

    Buckets are kept in the order their setting identifier was first seen and
    records inside a bucket keep insertion order. The index has a single
    writer: the pipeline appends each file's records from the calling thread.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, list[SettingRecord]] = {}
        self._record_count = 0

    def add(self, record: SettingRecord) -> None:
        """Append ``record`` to the bucket for its setting identifier."""

        self._buckets.setdefault(record.setting_id, []).append(record)
        self._record_count += 1

    def extend(self, records: Iterable[SettingRecord]) -> None:
        """Append every record from ``records`` in order."""

        for record in records:
            self.add(record)

    def get(self, setting_id: str) -> tuple[SettingRecord, ...]:
        """Return the records indexed under ``setting_id``."""

        return tuple(self._buckets.get(setting_id, ()))

    def buckets(self) -> Iterator[tuple[str, tuple[SettingRecord, ...]]]:
        """Yield ``(setting_id, records)`` pairs in first-insertion order."""

        for setting_id, records in self._buckets.items():
            yield setting_id, tuple(records)

    @property
    def record_count(self) -> int:
        """Return the total number of indexed records."""

        return self._record_count

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, setting_id: object) -> bool:
        return setting_id in self._buckets


__all__ = ["CorpusIndex"]
