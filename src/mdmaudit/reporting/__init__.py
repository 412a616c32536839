# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Reporting helpers for duplicate and conflict results."""

from __future__ import annotations

from .emitters import CSV_COLUMNS, build_payload, render_csv, render_json, select_entries
from .formatters import build_duplicates_table, render_table, render_table_text, write_report

__all__ = [
    "CSV_COLUMNS",
    "build_duplicates_table",
    "build_payload",
    "render_csv",
    "render_json",
    "render_table",
    "render_table_text",
    "select_entries",
    "write_report",
]
