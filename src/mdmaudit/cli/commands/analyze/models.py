# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data structures for the analyze CLI command."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from ....config.models import Config


class ReportFormatChoice(str, Enum):
    """Report formats selectable from the command line."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


ROOT_ARGUMENT = Annotated[
    Path,
    typer.Argument(help="Directory holding the configuration artifacts to analyse."),
]
FORMAT_OPTION = Annotated[
    ReportFormatChoice | None,
    typer.Option("--format", "-f", help="Report format (defaults to configuration, then table)."),
]
OUTPUT_OPTION = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the report to this file (tables as plain text)."),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Number of documents parsed in parallel."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Additional TOML configuration file."),
]
CONFLICTS_ONLY_OPTION = Annotated[
    bool,
    typer.Option("--conflicts-only", help="Only report settings whose values disagree."),
]
FAIL_ON_CONFLICT_OPTION = Annotated[
    bool,
    typer.Option("--fail-on-conflict", help="Exit with status 1 when a conflict is found."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug diagnostics."),
]
NO_EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--no-emoji", help="Disable emoji in status messages."),
]
NO_COLOR_OPTION = Annotated[
    bool,
    typer.Option("--no-color", help="Disable coloured output."),
]


@dataclass(slots=True)
class AnalyzeCLIOptions:
    """Normalised CLI inputs for the analyze command."""

    root: Path
    config_file: Path | None
    report_format: ReportFormatChoice | None
    output: Path | None
    jobs: int | None
    conflicts_only: bool
    fail_on_conflict: bool
    verbose: bool
    emoji: bool
    color: bool

    def apply(self, config: Config) -> Config:
        """Return ``config`` with the command-line overrides applied.

        Flags left at their defaults do not override configuration values.

        Args:
            config: Configuration loaded from files.

        Returns:
            Config: Updated configuration copy.
        """

        output_updates: dict[str, object] = {}
        if self.report_format is not None:
            output_updates["format"] = self.report_format.value
        if self.output is not None:
            output_updates["output"] = self.output
        if self.conflicts_only:
            output_updates["conflicts_only"] = True
        if self.fail_on_conflict:
            output_updates["fail_on_conflict"] = True
        if self.verbose:
            output_updates["verbose"] = True
        if not self.emoji:
            output_updates["emoji"] = False
        if not self.color:
            output_updates["color"] = False
        updated = config.model_copy(update={"output": config.output.model_copy(update=output_updates)})
        if self.jobs is not None:
            updated = updated.model_copy(
                update={"execution": updated.execution.model_copy(update={"jobs": self.jobs})},
            )
        return updated


def build_analyze_options(
    root: Path,
    *,
    config_file: Path | None = None,
    report_format: ReportFormatChoice | None = None,
    output: Path | None = None,
    jobs: int | None = None,
    conflicts_only: bool = False,
    fail_on_conflict: bool = False,
    verbose: bool = False,
    no_emoji: bool = False,
    no_color: bool = False,
) -> AnalyzeCLIOptions:
    """Construct ``AnalyzeCLIOptions`` from Typer parameters."""

    return AnalyzeCLIOptions(
        root=root.expanduser(),
        config_file=config_file.expanduser() if config_file else None,
        report_format=report_format,
        output=output.expanduser() if output else None,
        jobs=jobs,
        conflicts_only=conflicts_only,
        fail_on_conflict=fail_on_conflict,
        verbose=verbose,
        emoji=not no_emoji,
        color=not no_color,
    )


__all__ = [
    "AnalyzeCLIOptions",
    "ReportFormatChoice",
    "build_analyze_options",
]
