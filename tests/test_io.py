# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for document loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdmaudit.errors import DocumentParseError
from mdmaudit.io import is_plist_path, load_document
from tests.helpers.documents import DocumentWriter


def test_loads_json_with_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "bom.json"
    path.write_bytes(b'\xef\xbb\xbf{"settings": []}')

    assert load_document(path) == {"settings": []}


def test_loads_property_lists(write_document: DocumentWriter) -> None:
    path = write_document("profile.mobileconfig", {"PayloadContent": [{"PayloadType": "x", "Key": True}]})

    assert load_document(path) == {"PayloadContent": [{"PayloadType": "x", "Key": True}]}


def test_invalid_json_raises_parse_error(write_document: DocumentWriter) -> None:
    path = write_document("broken.json", "{ nope")

    with pytest.raises(DocumentParseError) as excinfo:
        load_document(path)

    assert excinfo.value.path == path
    assert "invalid JSON" in excinfo.value.reason


def test_invalid_plist_raises_parse_error(write_document: DocumentWriter) -> None:
    path = write_document("broken.plist", {"a": 1})
    path.write_text("<plist><dict><key>a</key>", encoding="utf-8")

    with pytest.raises(DocumentParseError):
        load_document(path)


def test_missing_document_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "absent.json")


def test_plist_suffix_detection() -> None:
    assert is_plist_path(Path("a.PLIST"))
    assert is_plist_path(Path("b.mobileconfig"))
    assert not is_plist_path(Path("c.json"))
