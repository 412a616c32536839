# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import logging
from functools import lru_cache

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text


@lru_cache(maxsize=None)
def status_console(*, stderr: bool, color: bool) -> Console:
    """Return the shared console for one output stream and colour preference.

    Args:
        stderr: Whether the console writes to standard error.
        color: Whether colour output is allowed; Rich still drops colour when
            the stream is not a terminal.

    Returns:
        Console: Cached console bound lazily to the current stream.
    """

    return Console(stderr=stderr, no_color=not color, highlight=False, soft_wrap=True)


def emoji(symbol: str, enable: bool) -> str:
    """Select an emoji symbol based on the caller's preference.

    Args:
        symbol: Emoji text to include in the output.
        enable: Flag indicating whether emoji output is desired.

    Returns:
        str: Emoji symbol when enabled, otherwise an empty string.
    """

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_color: bool | None = None,
    console: Console | None = None,
) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style name to apply when colour output is active.
        use_color: ``False`` disables styling; ``None`` leaves it to terminal detection.
        console: Explicit console; the shared stdout console when omitted.
    """

    color_enabled = use_color is not False
    target = status_console(stderr=False, color=color_enabled) if console is None else console
    target.print(Text(msg, style=style if style and color_enabled else ""))


def info(
    msg: str,
    *,
    use_emoji: bool,
    use_color: bool | None = None,
    console: Console | None = None,
) -> None:
    """Emit an informational message."""

    _print_line(
        f"{emoji('ℹ️ ', use_emoji)}{msg}",
        style="cyan",
        use_color=use_color,
        console=console,
    )


def ok(
    msg: str,
    *,
    use_emoji: bool,
    use_color: bool | None = None,
    console: Console | None = None,
) -> None:
    """Emit a success message."""

    _print_line(
        f"{emoji('✅ ', use_emoji)}{msg}",
        style="green",
        use_color=use_color,
        console=console,
    )


def warn(
    msg: str,
    *,
    use_emoji: bool,
    use_color: bool | None = None,
    console: Console | None = None,
) -> None:
    """Emit a warning message."""

    _print_line(
        f"{emoji('⚠️ ', use_emoji)}{msg}",
        style="yellow",
        use_color=use_color,
        console=console,
    )


def fail(
    msg: str,
    *,
    use_emoji: bool,
    use_color: bool | None = None,
    console: Console | None = None,
) -> None:
    """Emit an error message."""

    _print_line(
        f"{emoji('❌ ', use_emoji)}{msg}",
        style="red",
        use_color=use_color,
        console=console,
    )


def configure_logging(*, verbose: bool) -> None:
    """Route library loggers through Rich; DEBUG when ``verbose``, else WARNING.

    Args:
        verbose: Whether debug-level diagnostics should be shown.
    """

    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=status_console(stderr=True, color=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    logger = logging.getLogger("mdmaudit")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


__all__ = ["configure_logging", "emoji", "fail", "info", "ok", "status_console", "warn"]
