# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdmaudit.config import Config, ConfigFile, ConfigLoader, load_config
from mdmaudit.config.models import DiscoveryConfig
from mdmaudit.config.files import expand_env, merge_sections
from mdmaudit.errors import ConfigError


def test_defaults_without_files(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.output.format == "table"
    assert config.discovery.extensions == [".json", ".mobileconfig", ".plist"]
    assert config.discovery.metadata_suffix == ".meta.json"
    assert "scheduledActionsForRule" in config.extraction.compliance_excluded_keys
    assert config.extraction.path_separator == " > "
    assert config.execution.jobs >= 1


def test_project_file_overrides_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.mdmaudit.output]\nformat = "csv"\nconflicts_only = true\n',
        encoding="utf-8",
    )
    (tmp_path / ".mdmaudit.toml").write_text('[output]\nformat = "json"\n', encoding="utf-8")

    config = load_config(tmp_path)

    assert config.output.format == "json"
    assert config.output.conflicts_only is True


def test_explicit_file_wins(tmp_path: Path) -> None:
    (tmp_path / ".mdmaudit.toml").write_text("[execution]\njobs = 2\n", encoding="utf-8")
    explicit = tmp_path / "ci.toml"
    explicit.write_text("[execution]\njobs = 7\nfile_timeout = 5\n", encoding="utf-8")

    config = load_config(tmp_path, explicit=explicit)

    assert config.execution.jobs == 7
    assert config.execution.file_timeout == 5


def test_missing_explicit_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, explicit=tmp_path / "absent.toml")


def test_invalid_values_raise_config_error(tmp_path: Path) -> None:
    (tmp_path / ".mdmaudit.toml").write_text("[execution]\njobs = 0\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(tmp_path)


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".mdmaudit.toml").write_text("[output\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_includes_and_environment_expansion(tmp_path: Path) -> None:
    (tmp_path / "base.toml").write_text('[discovery]\nexcludes = ["archive/*"]\n', encoding="utf-8")
    main = tmp_path / "main.toml"
    main.write_text('include = "base.toml"\n[output]\noutput = "${REPORT_DIR}/report.json"\n', encoding="utf-8")

    sections = ConfigFile(main, env={"REPORT_DIR": "/tmp/reports"}).sections()

    assert sections == {
        "discovery": {"excludes": ["archive/*"]},
        "output": {"output": Path("/tmp/reports/report.json")},
    }


def test_circular_includes_are_rejected(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('include = "b.toml"\n', encoding="utf-8")
    (tmp_path / "b.toml").write_text('include = "a.toml"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="Circular include"):
        ConfigFile(tmp_path / "a.toml").sections()


def test_loader_without_files_uses_defaults() -> None:
    assert ConfigLoader().load() == Config()


def test_extensions_are_normalised() -> None:
    config = DiscoveryConfig(extensions=["JSON", ".Plist", " "])

    assert config.extensions == [".json", ".plist"]


def test_merge_and_env_helpers() -> None:
    merged = merge_sections(
        {"output": {"format": "csv", "emoji": False}},
        {"output": {"format": "json"}, "execution": {"jobs": 2}},
    )

    assert merged == {"output": {"format": "json", "emoji": False}, "execution": {"jobs": 2}}
    assert expand_env(["$HOME_DIR/x", "$UNSET"], {"HOME_DIR": "/h"}) == ["/h/x", "$UNSET"]
    assert expand_env(3, {}) == 3



def test_unknown_section_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".mdmaudit.toml").write_text("[reporting]\nformat = \"json\"\n", encoding="utf-8")

    with pytest.raises(ConfigError, match=r"unknown section \[reporting\]"):
        load_config(tmp_path)


def test_sections_are_normalised_when_read(tmp_path: Path) -> None:
    path = tmp_path / "extra.toml"
    path.write_text('[discovery]\nextensions = ["JSON"]\n[execution]\nfile_timeout = 2\n', encoding="utf-8")

    sections = ConfigFile(path).sections()

    assert sections == {"discovery": {"extensions": [".json"]}, "execution": {"file_timeout": 2.0}}


def test_pyproject_reads_only_its_own_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "x"\n[tool.ruff]\nline-length = 100\n[tool.mdmaudit.execution]\njobs = 3\n',
        encoding="utf-8",
    )

    assert load_config(tmp_path).execution.jobs == 3
