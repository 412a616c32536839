# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading configuration documents from disk."""

from __future__ import annotations

import json
import plistlib
from pathlib import Path
from typing import Any, Final
from xml.parsers.expat import ExpatError

from .errors import DocumentParseError

PLIST_SUFFIXES: Final[frozenset[str]] = frozenset({".plist", ".mobileconfig"})


def is_plist_path(path: Path) -> bool:
    """Return ``True`` when ``path`` names a property-list document."""

    return path.suffix.lower() in PLIST_SUFFIXES


def load_document(path: Path) -> Any:
    """Load a JSON or property-list document from disk.

    The parser is chosen from the file suffix: ``.plist`` and
    ``.mobileconfig`` go through :mod:`plistlib`, everything else is read as
    UTF-8 JSON (a leading byte-order mark is tolerated).

    Args:
        path: Filesystem path to the document.

    Returns:
        Any: Parsed document payload.

    Raises:
        FileNotFoundError: If the document does not exist.
        DocumentParseError: If the document cannot be deserialised.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    if is_plist_path(path):
        return _load_plist(path)
    return _load_json(path)


def _load_json(path: Path) -> Any:
    """Return the JSON payload stored at ``path``.

    Args:
        path: JSON document location.

    Returns:
        Any: Parsed JSON value.

    Raises:
        DocumentParseError: If the file is not valid UTF-8 JSON.
    """

    try:
        with path.open("r", encoding="utf-8-sig") as stream:
            return json.load(stream)
    except json.JSONDecodeError as exc:
        raise DocumentParseError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    except UnicodeDecodeError as exc:
        raise DocumentParseError(path, "document is not UTF-8 text") from exc


def _load_plist(path: Path) -> Any:
    """Return the property-list payload stored at ``path``.

    Args:
        path: XML or binary property-list location.

    Returns:
        Any: Parsed property-list value.

    Raises:
        DocumentParseError: If the property list is malformed.
    """

    try:
        with path.open("rb") as stream:
            return plistlib.load(stream)
    except (plistlib.InvalidFileException, ExpatError, ValueError) as exc:
        raise DocumentParseError(path, f"invalid property list ({exc})") from exc


__all__ = ["PLIST_SUFFIXES", "is_plist_path", "load_document"]
