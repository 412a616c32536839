# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Artifact manifest: the descriptor list of configurations shipped together."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ManifestError
from .types import UNKNOWN_TYPE

ARTIFACTS_KEY: Final[str] = "artifacts"


class ManifestEntry(BaseModel):
    """One artifact declared in a manifest."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="Name")
    type: str = Field(default=UNKNOWN_TYPE, alias="Type")
    reference_id: str = Field(default="", alias="ReferenceId")
    path: str = Field(alias="Path")
    description: str | None = Field(default=None, alias="Description")


class Manifest(BaseModel):
    """Ordered list of manifest entries together with their source file."""

    model_config = ConfigDict(frozen=True)

    source: Path
    entries: tuple[ManifestEntry, ...] = ()

    def resolve(self, entry: ManifestEntry, base: Path | None = None) -> Path:
        """Return the artifact path of ``entry`` anchored at ``base``.

        Args:
            entry: Manifest entry to locate.
            base: Directory relative paths are resolved against; defaults to
                the manifest's own directory.

        Returns:
            Path: Location of the artifact on disk.
        """

        candidate = Path(entry.path)
        if candidate.is_absolute():
            return candidate
        return (base or self.source.parent) / candidate

    def missing_artifacts(self, base: Path | None = None) -> list[ManifestEntry]:
        """Return entries whose artifact file does not exist."""

        return [entry for entry in self.entries if not self.resolve(entry, base).exists()]


def load_manifest(path: Path) -> Manifest:
    """Load a manifest from a JSON document.

    The document is either a top-level array of entries or an object with an
    ``artifacts`` array.

    Args:
        path: Manifest location.

    Returns:
        Manifest: Parsed manifest.

    Raises:
        ManifestError: If the file is missing, not JSON or has invalid entries.
    """
    if not path.is_file():
        raise ManifestError(f"Manifest not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    except UnicodeDecodeError as exc:
        raise ManifestError(f"{path}: manifest is not UTF-8 text") from exc
    raw_entries = _entries(payload, path)
    entries: list[ManifestEntry] = []
    for position, raw in enumerate(raw_entries):
        try:
            entries.append(ManifestEntry.model_validate(raw))
        except ValidationError as exc:
            raise ManifestError(f"{path}: entry {position} is invalid: {exc}") from exc
    return Manifest(source=path, entries=tuple(entries))


def _entries(payload: Any, path: Path) -> Sequence[Any]:
    if isinstance(payload, Mapping):
        payload = payload.get(ARTIFACTS_KEY)
    if isinstance(payload, list):
        return payload
    raise ManifestError(f"{path}: expected an array of artifacts")


__all__ = ["Manifest", "ManifestEntry", "load_manifest"]
