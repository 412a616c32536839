# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console rendering of duplicate reports using Rich tables."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Final

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..config.models import OutputConfig
from ..models import DuplicateEntry
from ..pipeline import AnalysisResult
from .emitters import render_csv, render_json, select_entries

TABLE_FILE_WIDTH: Final[int] = 160


def build_duplicates_table(entries: tuple[DuplicateEntry, ...], *, color: bool) -> Table:
    """Return a Rich table listing ``entries``.

    Args:
        entries: Duplicates in report order.
        color: Whether status cells should be styled.

    Returns:
        Table: Table with one row per duplicate setting.
    """

    table = Table(title="Duplicate settings", box=box.SIMPLE_HEAVY if color else box.SIMPLE, expand=True)
    table.add_column("Setting", style="bold", overflow="fold")
    table.add_column("Files", justify="right")
    table.add_column("Status")
    table.add_column("Occurrences", overflow="fold")
    for entry in entries:
        status = Text("CONFLICT", style="bold red" if color else "") if entry.has_conflict else Text(
            "REDUNDANT", style="yellow" if color else ""
        )
        occurrences = "\n".join(
            f"{name} ({source}) = {value}"
            for name, source, value in zip(entry.config_names, entry.source_files, entry.normalized_values)
        )
        table.add_row(entry.setting_id, str(entry.occurrence_count), status, occurrences)
    return table


def render_table(result: AnalysisResult, console: Console, *, conflicts_only: bool = False, color: bool = True) -> None:
    """Print the duplicate table and a one-line summary to ``console``."""

    entries = select_entries(result, conflicts_only=conflicts_only)
    if entries:
        console.print(build_duplicates_table(entries, color=color))
    summary = result.summary
    console.print(
        f"{len(result.files)} files scanned, {result.record_count} settings, "
        f"{summary.total} duplicates ({summary.conflicts} conflicts, {summary.redundant} redundant)"
    )


def render_table_text(result: AnalysisResult, *, conflicts_only: bool = False) -> str:
    """Return the table report as plain text for writing to a file."""

    buffer = io.StringIO()
    plain = Console(file=buffer, width=TABLE_FILE_WIDTH, color_system=None, highlight=False, emoji=False)
    render_table(result, plain, conflicts_only=conflicts_only, color=False)
    return buffer.getvalue()


def write_report(result: AnalysisResult, output: OutputConfig, console: Console) -> Path | None:
    """Render ``result`` in the configured format.

    Args:
        result: Completed analysis.
        output: Output configuration selecting format and destination.
        console: Console used when no destination file is configured.

    Returns:
        Path | None: The report file written, or ``None`` when printed.
    """

    if output.format == "table":
        if output.output is None:
            render_table(result, console, conflicts_only=output.conflicts_only, color=output.color)
            return None
        text = render_table_text(result, conflicts_only=output.conflicts_only)
    elif output.format == "json":
        text = render_json(result, conflicts_only=output.conflicts_only)
    else:
        text = render_csv(result, conflicts_only=output.conflicts_only)
    if output.output is None:
        console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
        return None
    output.output.parent.mkdir(parents=True, exist_ok=True)
    output.output.write_text(text if text.endswith("\n") else f"{text}\n", encoding="utf-8")
    return output.output


__all__ = ["build_duplicates_table", "render_table", "render_table_text", "write_report"]
