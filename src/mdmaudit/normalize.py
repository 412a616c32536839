# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Canonical string forms used when comparing setting values."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any, Final

NULL_SENTINEL: Final[str] = "<null>"


def normalize_value(value: Any) -> str:
    """Return the comparable string form of ``value``.

    Args:
        value: Raw value read from a document.

    Returns:
        str: ``"<null>"`` for ``None``, lowercase literals for booleans, the
        plain string form for other scalars and a canonical JSON rendering for
        containers.
    """

    if value is None:
        return NULL_SENTINEL
    # bool before numbers: ``True`` is an ``int`` too.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return json.dumps(_jsonable(value), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _jsonable(value: Any) -> Any:
    """Return ``value`` converted into JSON-serialisable primitives."""

    if isinstance(value, Mapping):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Sequence) and not isinstance(value, str):
        return [_jsonable(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


__all__ = ["NULL_SENTINEL", "normalize_value"]
