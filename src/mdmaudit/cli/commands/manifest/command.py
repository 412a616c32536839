# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command listing the artifacts declared in a manifest."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich import box
from rich.table import Table

from ....errors import ManifestError
from ....manifest import Manifest, load_manifest
from ...shared import build_cli_logger, build_report_console

MANIFEST_ARGUMENT = Annotated[Path, typer.Argument(help="Manifest JSON file.")]
BASE_OPTION = Annotated[
    Path | None,
    typer.Option("--base", "-b", help="Directory artifact paths are relative to (default: manifest folder)."),
]
NO_EMOJI_OPTION = Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in status messages.")]


def build_manifest_table(manifest: Manifest) -> Table:
    """Return a Rich table with one row per manifest entry."""

    table = Table(title=f"Manifest: {manifest.source.name}", box=box.SIMPLE, expand=True)
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Reference Id")
    table.add_column("Path", overflow="fold")
    for entry in manifest.entries:
        table.add_row(entry.name, entry.type, entry.reference_id or "-", entry.path)
    return table


def manifest_command(
    manifest_path: MANIFEST_ARGUMENT,
    base: BASE_OPTION = None,
    no_emoji: NO_EMOJI_OPTION = False,
) -> None:
    """List the artifacts declared in a manifest and flag missing files.

    Raises:
        typer.Exit: With status 2 when the manifest cannot be loaded.
    """

    logger = build_cli_logger(emoji=not no_emoji)
    try:
        manifest = load_manifest(manifest_path.expanduser())
    except ManifestError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=2) from exc

    build_report_console().print(build_manifest_table(manifest))
    missing = manifest.missing_artifacts(base.expanduser() if base else None)
    for entry in missing:
        logger.warn(f"Artifact not found for {entry.name}: {entry.path}")
    if not missing:
        logger.ok(f"{len(manifest.entries)} artifacts listed")


__all__ = ["build_manifest_table", "manifest_command"]
