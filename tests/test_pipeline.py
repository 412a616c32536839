# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end tests for the analysis pipeline."""

from __future__ import annotations

import json
import threading
import time
from pathlib import Path
from typing import Any

import pytest

from mdmaudit.config import Config
from mdmaudit.config.models import ExecutionConfig
from mdmaudit.errors import AnalysisCancelled, AnalysisRootError
from mdmaudit.extraction import AdapterRegistry
from mdmaudit.models import SettingRecord
from mdmaudit.pipeline import AnalysisPipeline, analyze
from tests.helpers.documents import DocumentWriter, catalog, choice, compliance, group, profile, simple


def _filevault(value: str) -> dict[str, Any]:
    return catalog(group("com.apple.security_group", choice("enableFileVault", value)))


def _serial() -> Config:
    return Config(execution=ExecutionConfig(jobs=1))


def test_conflicting_nested_setting_is_reported_once(tmp_path: Path, write_document: DocumentWriter) -> None:
    write_document("a.json", _filevault("true"))
    write_document("b.json", _filevault("false"))
    write_document("c.json", compliance(passcodeRequired=True))

    result = analyze(tmp_path, _serial())

    assert result.files == ("a.json", "b.json", "c.json")
    assert len(result.duplicates) == 1
    entry = result.duplicates[0]
    assert entry.setting_id == "enableFileVault"
    assert entry.occurrence_count == 2
    assert entry.has_conflict is True
    assert entry.source_files == ("a.json", "b.json")
    assert entry.config_names == ("a", "b")
    assert result.has_conflicts
    assert result.summary.conflicts == 1


def test_boolean_values_conflict_through_the_pipeline(tmp_path: Path, write_document: DocumentWriter) -> None:
    write_document("a.json", catalog(group("com.apple.security_group", simple("enableFileVault", True))))
    write_document("b.json", catalog(group("com.apple.security_group", simple("enableFileVault", False))))
    write_document("c.json", compliance(passcodeRequired=True))

    result = analyze(tmp_path, _serial())

    assert [(entry.setting_id, entry.has_conflict) for entry in result.duplicates] == [("enableFileVault", True)]
    assert result.duplicates[0].normalized_values == ("true", "false")


def test_redundant_settings_across_formats(tmp_path: Path, write_document: DocumentWriter) -> None:
    write_document("one.json", catalog(simple("idleTime", 600)))
    write_document("two.json", catalog(simple("idleTime", 600)))

    result = analyze(tmp_path, _serial())

    assert [(entry.setting_id, entry.has_conflict) for entry in result.duplicates] == [("idleTime", False)]
    assert not result.has_conflicts


def test_parse_failures_become_warnings(tmp_path: Path, write_document: DocumentWriter) -> None:
    write_document("a.json", _filevault("true"))
    write_document("broken.json", "{ not json")
    write_document("c.json", _filevault("true"))

    result = analyze(tmp_path, _serial())

    assert [warning.source_file for warning in result.warnings] == ["broken.json"]
    assert "invalid JSON" in result.warnings[0].message
    assert result.duplicates[0].occurrence_count == 2


def test_unrecognised_documents_contribute_nothing(tmp_path: Path, write_document: DocumentWriter) -> None:
    write_document("notes.json", {"hello": "world"})
    write_document("list.json", [1, 2, 3])

    result = analyze(tmp_path, _serial())

    assert result.record_count == 0
    assert result.duplicates == ()
    assert result.warnings == ()


def test_metadata_descriptor_names_the_configuration(tmp_path: Path, write_document: DocumentWriter) -> None:
    write_document("a.json", _filevault("true"))
    write_document("b.json", _filevault("true"))
    write_document("a.meta.json", {"ReferenceId": "1111", "Name": "FileVault Policy", "Type": "SettingsCatalog"})

    result = analyze(tmp_path, _serial())

    assert result.files == ("a.json", "b.json")
    entry = result.duplicates[0]
    assert entry.config_names == ("FileVault Policy", "b")
    assert entry.reference_ids == ("1111", "b")


def test_property_list_profiles(tmp_path: Path, write_document: DocumentWriter) -> None:
    screensaver = {"PayloadType": "com.apple.screensaver", "PayloadUUID": "u", "idleTime": 300}
    write_document("first.mobileconfig", profile(screensaver))
    write_document("second.plist", profile({**screensaver, "idleTime": 600}))

    result = analyze(tmp_path, _serial())

    assert [entry.setting_id for entry in result.duplicates] == ["com.apple.screensaver.idleTime"]
    assert result.duplicates[0].normalized_values == ("300", "600")


def test_nested_files_use_relative_posix_paths(tmp_path: Path, write_document: DocumentWriter) -> None:
    write_document("macos/security/a.json", _filevault("true"))
    write_document("macos/b.json", _filevault("false"))

    result = analyze(tmp_path, _serial())

    assert result.duplicates[0].source_files == ("macos/b.json", "macos/security/a.json")


def test_parallel_run_matches_serial_order(tmp_path: Path, write_document: DocumentWriter) -> None:
    for position in range(12):
        write_document(
            f"policy_{position:02d}.json",
            catalog(simple("shared", position % 3), simple(f"pair_{position // 2}", "x")),
        )

    serial = analyze(tmp_path, _serial())
    parallel = analyze(tmp_path, Config(execution=ExecutionConfig(jobs=4)))

    assert parallel.files == serial.files
    assert parallel.duplicates == serial.duplicates
    assert parallel.duplicates[0].setting_id == "shared"
    assert parallel.duplicates[0].occurrence_count == 12


def test_missing_root_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(AnalysisRootError):
        analyze(tmp_path / "missing")


def test_cancellation_stops_before_detection(tmp_path: Path, write_document: DocumentWriter) -> None:
    write_document("a.json", _filevault("true"))
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(AnalysisCancelled):
        AnalysisPipeline(root=tmp_path, config=_serial(), cancel_event=cancel).run()


class _SlowAdapter:
    name = "slow"

    def __init__(self, release: threading.Event) -> None:
        self.release = release

    def matches(self, document: Any) -> bool:
        return isinstance(document, dict) and "slow" in document

    def extract(self, document: Any) -> list[SettingRecord]:
        self.release.wait(3.0)
        return [SettingRecord(setting_id="slow", value=1, path="slow")]


@pytest.mark.parametrize("jobs", [1, 2])
def test_file_timeout_skips_slow_documents(tmp_path: Path, write_document: DocumentWriter, jobs: int) -> None:
    write_document("a.json", {"slow": True})
    write_document("b.json", _filevault("true"))
    release = threading.Event()
    registry = AdapterRegistry(adapters=(_SlowAdapter(release), *AdapterRegistry.default().adapters))
    config = Config(execution=ExecutionConfig(jobs=jobs, file_timeout=0.2))

    started = time.monotonic()
    try:
        result = AnalysisPipeline(root=tmp_path, config=config, registry=registry).run()
        elapsed = time.monotonic() - started
    finally:
        release.set()

    assert elapsed < 1.5
    assert [(warning.source_file, warning.message) for warning in result.warnings] == [
        ("a.json", "timed out after 0.2s")
    ]
    assert result.record_count == 1


def test_metadata_files_are_not_analysed(tmp_path: Path, write_document: DocumentWriter) -> None:
    write_document("a.json", _filevault("true"))
    (tmp_path / "a.meta.json").write_text(json.dumps({"settings": []}), encoding="utf-8")

    result = analyze(tmp_path, _serial())

    assert result.files == ("a.json",)
