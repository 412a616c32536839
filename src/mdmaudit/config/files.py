# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""TOML configuration files and the validated section fragments they contribute."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from string import Template
from typing import Any, Final

from pydantic import BaseModel, ValidationError

from ..errors import ConfigError
from .models import DiscoveryConfig, ExecutionConfig, ExtractionConfig, OutputConfig

INCLUDE_KEY: Final[str] = "include"
PYPROJECT_TABLE: Final[tuple[str, ...]] = ("tool", "mdmaudit")
SECTION_MODELS: Final[Mapping[str, type[BaseModel]]] = {
    "discovery": DiscoveryConfig,
    "extraction": ExtractionConfig,
    "execution": ExecutionConfig,
    "output": OutputConfig,
}

Sections = dict[str, dict[str, Any]]


def read_toml(path: Path) -> dict[str, Any]:
    """Return the TOML document at ``path``.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc.strerror or exc}") from exc


def merge_sections(base: Sections, override: Sections) -> Sections:
    """Return ``override`` layered onto ``base`` one section key at a time."""

    merged = {name: dict(values) for name, values in base.items()}
    for name, values in override.items():
        merged.setdefault(name, {}).update(values)
    return merged


def expand_env(value: Any, env: Mapping[str, str]) -> Any:
    """Substitute ``$VAR`` and ``${VAR}`` in strings; unknown names stay as written."""

    if isinstance(value, str):
        return Template(value).safe_substitute(env)
    if isinstance(value, list):
        return [expand_env(item, env) for item in value]
    return value


def validate_section(name: str, values: Any, *, origin: Path, env: Mapping[str, str]) -> dict[str, Any]:
    """Validate one ``[name]`` table and return only the keys it sets.

    Args:
        name: Section name, one of :data:`SECTION_MODELS`.
        values: Raw TOML table.
        origin: File the table was read from, used in error messages.
        env: Environment used for variable substitution.

    Returns:
        dict[str, Any]: Normalised values for the keys present in ``values``.

    Raises:
        ConfigError: If the section is unknown, not a table, or invalid.
    """

    model = SECTION_MODELS.get(name)
    if model is None:
        raise ConfigError(f"{origin}: unknown section [{name}]")
    if not isinstance(values, Mapping):
        raise ConfigError(f"{origin}: [{name}] must be a table")
    expanded = {key: expand_env(item, env) for key, item in values.items()}
    try:
        section = model.model_validate(expanded)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {origin} [{name}]: {exc}") from exc
    return section.model_dump(include=set(expanded) & set(model.model_fields))


@dataclass(frozen=True, slots=True)
class ConfigFile:
    """A TOML file contributing configuration sections.

    ``table`` names the nested table holding the sections (``tool.mdmaudit``
    inside ``pyproject.toml``); an empty tuple means the document root. An
    ``include`` key pulls in further files, resolved against the including
    file's directory, before the file's own sections are applied.
    """

    path: Path
    table: tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=lambda: os.environ)

    def sections(self) -> Sections:
        """Return the validated sections, empty when the file does not exist."""

        if not self.path.is_file():
            return {}
        return self._load(self.path, self.table, ())

    def _load(self, path: Path, table: tuple[str, ...], chain: tuple[Path, ...]) -> Sections:
        resolved = path.resolve()
        if resolved in chain:
            cycle = " -> ".join(str(entry) for entry in (*chain, resolved))
            raise ConfigError(f"Circular include detected: {cycle}")
        document: Any = read_toml(resolved)
        for key in table:
            document = document.get(key) if isinstance(document, Mapping) else None
        if not isinstance(document, Mapping):
            return {}
        document = dict(document)
        sections: Sections = {}
        for include in _include_paths(document.pop(INCLUDE_KEY, None), resolved):
            sections = merge_sections(sections, self._load(include, (), (*chain, resolved)))
        own = {
            name: validate_section(name, values, origin=resolved, env=self.env) for name, values in document.items()
        }
        return merge_sections(sections, own)


def _include_paths(raw: Any, origin: Path) -> list[Path]:
    if raw is None:
        return []
    names = [raw] if isinstance(raw, str) else raw
    if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
        raise ConfigError(f"{origin}: include must be a path or a list of paths")
    return [origin.parent / name for name in names]


__all__ = [
    "ConfigFile",
    "INCLUDE_KEY",
    "PYPROJECT_TABLE",
    "SECTION_MODELS",
    "Sections",
    "expand_env",
    "merge_sections",
    "read_toml",
    "validate_section",
]
