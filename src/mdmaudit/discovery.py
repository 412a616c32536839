# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem scanning for candidate configuration documents."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path

from .config.models import DiscoveryConfig
from .errors import AnalysisRootError


def relative_posix(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` using forward slashes."""

    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


@dataclass(slots=True)
class DocumentScanner:
    """Scan the analysis root for documents the adapters may understand."""

    root: Path
    config: DiscoveryConfig = field(default_factory=DiscoveryConfig)

    def documents(self) -> tuple[Path, ...]:
        """Return sorted document paths under the root.

        Returns:
            tuple[Path, ...]: Candidate files ordered by relative POSIX path.

        Raises:
            AnalysisRootError: If the root is missing or not a directory.
        """
        if not self.root.is_dir():
            raise AnalysisRootError(self.root)
        paths = [path for path in self._walk() if self._is_candidate(path)]
        return tuple(sorted(paths, key=lambda path: relative_posix(path, self.root)))

    def _walk(self) -> Iterator[Path]:
        for current, dirnames, filenames in os.walk(self.root, followlinks=self.config.follow_symlinks):
            # Hidden directories (.git, .venv, ...) never hold artifacts.
            dirnames[:] = sorted(name for name in dirnames if not name.startswith("."))
            base = Path(current)
            for filename in filenames:
                yield base / filename

    def _is_candidate(self, path: Path) -> bool:
        name = path.name
        if name.startswith("."):
            return False
        if self.config.metadata_suffix and name.lower().endswith(self.config.metadata_suffix.lower()):
            return False
        if path.suffix.lower() not in self.config.extensions:
            return False
        relative = relative_posix(path, self.root)
        return not any(fnmatch(relative, pattern) or fnmatch(name, pattern) for pattern in self.config.excludes)


__all__ = ["DocumentScanner", "relative_posix"]
