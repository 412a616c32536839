# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Settings extraction from Settings Catalog, compliance and payload documents."""

from __future__ import annotations

from typing import Any

from ..models import SettingRecord
from .adapters import (
    DEFAULT_COMPLIANCE_EXCLUDED_KEYS,
    DEFAULT_PAYLOAD_EXCLUDED_KEYS,
    AdapterRegistry,
    CompliancePolicyAdapter,
    PayloadBundleAdapter,
    SettingsAdapter,
    SettingsCatalogAdapter,
)
from .walker import SettingNode, TreeWalker, walk_instances


def extract_settings(document: Any) -> list[SettingRecord]:
    """Return leaf settings from ``document`` using the default adapters."""

    return AdapterRegistry.default().extract(document)


__all__ = [
    "AdapterRegistry",
    "CompliancePolicyAdapter",
    "DEFAULT_COMPLIANCE_EXCLUDED_KEYS",
    "DEFAULT_PAYLOAD_EXCLUDED_KEYS",
    "PayloadBundleAdapter",
    "SettingNode",
    "SettingsAdapter",
    "SettingsCatalogAdapter",
    "TreeWalker",
    "extract_settings",
    "walk_instances",
]
