# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for sibling metadata descriptor resolution."""

from __future__ import annotations

import json
from pathlib import Path

from mdmaudit.metadata import MetadataResolver, descriptor_path


def test_descriptor_path_uses_stem() -> None:
    assert descriptor_path(Path("/data/FileVault.json")) == Path("/data/FileVault.meta.json")
    assert descriptor_path(Path("/data/a.plist"), ".info.json") == Path("/data/a.info.json")


def test_resolves_descriptor_values(tmp_path: Path) -> None:
    document = tmp_path / "filevault.json"
    document.write_text("{}", encoding="utf-8")
    (tmp_path / "filevault.meta.json").write_text(
        json.dumps({"ReferenceId": "abc-123", "Name": "FileVault Baseline", "Type": "SettingsCatalog"}),
        encoding="utf-8",
    )

    metadata = MetadataResolver().resolve(document)

    assert metadata.reference_id == "abc-123"
    assert metadata.name == "FileVault Baseline"
    assert metadata.type == "SettingsCatalog"


def test_missing_descriptor_falls_back_to_stem(tmp_path: Path) -> None:
    document = tmp_path / "passcode.json"
    document.write_text("{}", encoding="utf-8")

    metadata = MetadataResolver().resolve(document)

    assert (metadata.reference_id, metadata.name, metadata.type) == ("passcode", "passcode", "Unknown")


def test_unreadable_descriptor_falls_back(tmp_path: Path) -> None:
    document = tmp_path / "broken.json"
    document.write_text("{}", encoding="utf-8")
    (tmp_path / "broken.meta.json").write_text("{not json", encoding="utf-8")

    assert MetadataResolver().resolve(document).name == "broken"


def test_non_object_descriptor_falls_back(tmp_path: Path) -> None:
    document = tmp_path / "listed.json"
    document.write_text("{}", encoding="utf-8")
    (tmp_path / "listed.meta.json").write_text("[1, 2]", encoding="utf-8")

    assert MetadataResolver().resolve(document).reference_id == "listed"


def test_missing_keys_fall_back_individually(tmp_path: Path) -> None:
    document = tmp_path / "partial.json"
    document.write_text("{}", encoding="utf-8")
    (tmp_path / "partial.meta.json").write_text(json.dumps({"Name": "Partial", "Type": "  "}), encoding="utf-8")

    metadata = MetadataResolver().resolve(document)

    assert metadata.name == "Partial"
    assert metadata.reference_id == "partial"
    assert metadata.type == "Unknown"


def test_results_are_cached(tmp_path: Path) -> None:
    document = tmp_path / "cached.json"
    document.write_text("{}", encoding="utf-8")
    resolver = MetadataResolver()

    first = resolver.resolve(document)
    (tmp_path / "cached.meta.json").write_text(json.dumps({"Name": "Later"}), encoding="utf-8")

    assert resolver.resolve(document) is first
