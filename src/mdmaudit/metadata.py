# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the human identity of a document from its sibling descriptor."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from .models import ConfigMetadata
from .types import UNKNOWN_TYPE

LOGGER = logging.getLogger(__name__)

DEFAULT_METADATA_SUFFIX: Final[str] = ".meta.json"
_REFERENCE_ID_KEY: Final[str] = "ReferenceId"
_NAME_KEY: Final[str] = "Name"
_TYPE_KEY: Final[str] = "Type"


def descriptor_path(path: Path, suffix: str = DEFAULT_METADATA_SUFFIX) -> Path:
    """Return the descriptor location for ``path``: same stem, ``suffix`` appended."""

    return path.with_name(f"{path.stem}{suffix}")


def fallback_metadata(path: Path) -> ConfigMetadata:
    """Return filename-derived metadata for ``path``."""

    return ConfigMetadata(reference_id=path.stem, name=path.stem, type=UNKNOWN_TYPE)


class MetadataResolver:
    """Look up ``ReferenceId``/``Name``/``Type`` for documents, never failing."""

    def __init__(self, *, suffix: str = DEFAULT_METADATA_SUFFIX) -> None:
        self.suffix = suffix
        self._cache: dict[Path, ConfigMetadata] = {}
        self._lock = threading.Lock()

    def resolve(self, path: Path) -> ConfigMetadata:
        """Return metadata for ``path``, falling back to its base name.

        Args:
            path: Document whose identity should be resolved.

        Returns:
            ConfigMetadata: Descriptor values when a readable descriptor exists,
            otherwise the file stem as reference id and name with type
            ``"Unknown"``.
        """

        with self._lock:
            cached = self._cache.get(path)
        if cached is not None:
            return cached
        metadata = self._load(path)
        with self._lock:
            self._cache[path] = metadata
        return metadata

    def _load(self, path: Path) -> ConfigMetadata:
        fallback = fallback_metadata(path)
        descriptor = descriptor_path(path, self.suffix)
        if not descriptor.is_file():
            LOGGER.debug("no metadata descriptor for %s", path)
            return fallback
        try:
            payload = json.loads(descriptor.read_text(encoding="utf-8-sig"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            LOGGER.debug("unreadable metadata descriptor %s: %s", descriptor, exc)
            return fallback
        if not isinstance(payload, Mapping):
            LOGGER.debug("metadata descriptor %s is not an object", descriptor)
            return fallback
        return ConfigMetadata(
            reference_id=_text(payload, _REFERENCE_ID_KEY) or fallback.reference_id,
            name=_text(payload, _NAME_KEY) or fallback.name,
            type=_text(payload, _TYPE_KEY) or fallback.type,
        )


def _text(payload: Mapping[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "DEFAULT_METADATA_SUFFIX",
    "MetadataResolver",
    "descriptor_path",
    "fallback_metadata",
]
