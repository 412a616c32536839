# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for artifact manifest loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mdmaudit.errors import ManifestError
from mdmaudit.manifest import load_manifest


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_loads_top_level_array(tmp_path: Path) -> None:
    (tmp_path / "filevault.json").write_text("{}", encoding="utf-8")
    manifest = load_manifest(
        _write(
            tmp_path / "manifest.json",
            [
                {"Name": "FileVault", "Type": "SettingsCatalog", "ReferenceId": "1", "Path": "filevault.json"},
                {"Name": "Passcode", "Path": "passcode.json", "Description": "Legacy"},
            ],
        )
    )

    assert [entry.name for entry in manifest.entries] == ["FileVault", "Passcode"]
    assert manifest.entries[1].type == "Unknown"
    assert manifest.entries[1].description == "Legacy"
    assert manifest.resolve(manifest.entries[0]) == tmp_path / "filevault.json"
    assert [entry.name for entry in manifest.missing_artifacts()] == ["Passcode"]


def test_loads_artifacts_object(tmp_path: Path) -> None:
    manifest = load_manifest(_write(tmp_path / "m.json", {"artifacts": [{"Name": "A", "Path": "a.json"}]}))

    assert manifest.entries[0].path == "a.json"


def test_base_directory_override(tmp_path: Path) -> None:
    artifacts = tmp_path / "artifacts"
    artifacts.mkdir()
    (artifacts / "a.json").write_text("{}", encoding="utf-8")
    manifest = load_manifest(_write(tmp_path / "m.json", [{"Name": "A", "Path": "a.json"}]))

    assert manifest.missing_artifacts(artifacts) == []


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("{nope", "invalid JSON"),
        ('{"items": []}', "expected an array"),
        ('[{"Name": "no path"}]', "entry 0 is invalid"),
    ],
)
def test_invalid_manifests(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "m.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ManifestError, match=message):
        load_manifest(path)


def test_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="not found"):
        load_manifest(tmp_path / "absent.json")


def test_non_utf8_manifest(tmp_path: Path) -> None:
    path = tmp_path / "m.json"
    path.write_bytes(b'[{"Name": "\xff\xfe"}]')

    with pytest.raises(ManifestError, match="not UTF-8"):
        load_manifest(path)
