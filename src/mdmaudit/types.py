# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases and constants for configuration documents."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]

PATH_SEPARATOR: Final[str] = " > "
UNKNOWN_TYPE: Final[str] = "Unknown"

__all__ = [
    "PATH_SEPARATOR",
    "UNKNOWN_TYPE",
    "JSONPrimitive",
    "JSONValue",
]
