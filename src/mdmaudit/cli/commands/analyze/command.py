# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command running duplicate and conflict detection over a directory."""

from __future__ import annotations

import typer

from ....config import load_config
from ....errors import AnalysisRootError, ConfigError
from ....logging import configure_logging
from ....pipeline import AnalysisPipeline
from ....reporting import write_report
from ...shared import CLIError, CLILogger, build_cli_logger, build_report_console
from .models import (
    CONFIG_OPTION,
    CONFLICTS_ONLY_OPTION,
    FAIL_ON_CONFLICT_OPTION,
    FORMAT_OPTION,
    JOBS_OPTION,
    NO_COLOR_OPTION,
    NO_EMOJI_OPTION,
    OUTPUT_OPTION,
    ROOT_ARGUMENT,
    VERBOSE_OPTION,
    AnalyzeCLIOptions,
    build_analyze_options,
)

EXIT_CONFLICTS = 1
EXIT_FATAL = 2


def analyze_command(
    root: ROOT_ARGUMENT,
    report_format: FORMAT_OPTION = None,
    output: OUTPUT_OPTION = None,
    jobs: JOBS_OPTION = None,
    config_file: CONFIG_OPTION = None,
    conflicts_only: CONFLICTS_ONLY_OPTION = False,
    fail_on_conflict: FAIL_ON_CONFLICT_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    no_emoji: NO_EMOJI_OPTION = False,
    no_color: NO_COLOR_OPTION = False,
) -> None:
    """Find settings declared by several artifacts and flag conflicting values.

    Raises:
        typer.Exit: With status 1 for conflicts under ``--fail-on-conflict``
            and 2 for fatal errors (missing root, invalid configuration).
    """

    options = build_analyze_options(
        root,
        config_file=config_file,
        report_format=report_format,
        output=output,
        jobs=jobs,
        conflicts_only=conflicts_only,
        fail_on_conflict=fail_on_conflict,
        verbose=verbose,
        no_emoji=no_emoji,
        no_color=no_color,
    )
    logger = build_cli_logger(emoji=options.emoji, debug=options.verbose, no_color=not options.color)
    try:
        exit_code = _run(options, logger)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=exit_code)


def _run(options: AnalyzeCLIOptions, logger: CLILogger) -> int:
    if not options.root.is_dir():
        raise CLIError(f"Analysis root not found: {options.root}", exit_code=EXIT_FATAL)
    try:
        config = options.apply(load_config(options.root, explicit=options.config_file))
    except ConfigError as exc:
        raise CLIError(str(exc), exit_code=EXIT_FATAL) from exc
    configure_logging(verbose=config.output.verbose)
    logger.debug(f"root={options.root} jobs={config.execution.jobs} format={config.output.format}")

    try:
        result = AnalysisPipeline(root=options.root, config=config).run()
    except AnalysisRootError as exc:
        raise CLIError(str(exc), exit_code=EXIT_FATAL) from exc

    for warning in result.warnings:
        logger.warn(f"Skipped {warning.source_file}: {warning.message}")
    if result.warnings:
        logger.info(f"{len(result.warnings)} of {len(result.files)} documents skipped")
    written = write_report(result, config.output, build_report_console(no_color=not config.output.color))
    if written is not None:
        logger.ok(f"Report written to {written}")
    if config.output.fail_on_conflict and result.has_conflicts:
        logger.fail(f"{result.summary.conflicts} conflicting settings found")
        return EXIT_CONFLICTS
    return 0


__all__ = ["analyze_command"]
