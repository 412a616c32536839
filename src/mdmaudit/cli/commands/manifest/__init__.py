# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Manifest listing CLI command package."""

from __future__ import annotations

import typer

from ...shared import register_command
from .command import manifest_command

__all__ = ["register"]


def register(app: typer.Typer) -> None:
    """Register the manifest command.

    Args:
        app: Typer application receiving the manifest command registration.
    """

    register_command(app, manifest_command, name="manifest")
