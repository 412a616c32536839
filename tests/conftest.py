# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import plistlib
from pathlib import Path
from typing import Any

import pytest

from tests.helpers.documents import DocumentWriter


@pytest.fixture
def write_document(tmp_path: Path) -> DocumentWriter:
    """Write a JSON or property-list document below ``tmp_path``."""

    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix in {".plist", ".mobileconfig"}:
            path.write_bytes(plistlib.dumps(payload))
        elif isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
