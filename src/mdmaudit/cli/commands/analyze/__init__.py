# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Analyze CLI command package."""

from __future__ import annotations

import typer

from ...shared import register_command
from .command import analyze_command

__all__ = ["register"]


def register(app: typer.Typer) -> None:
    """Register the analyze command.

    Args:
        app: Typer application receiving the analyze command registration.
    """

    register_command(app, analyze_command, name="analyze")
