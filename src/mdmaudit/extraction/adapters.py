# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Format adapters converting parsed documents into setting records."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final, Protocol, runtime_checkable

from ..models import SettingRecord
from ..types import PATH_SEPARATOR, UNKNOWN_TYPE
from .walker import TreeWalker

LOGGER = logging.getLogger(__name__)

SETTINGS_FIELD: Final[str] = "settings"
SETTING_INSTANCE_FIELD: Final[str] = "settingInstance"
RULE_SCHEDULING_FIELD: Final[str] = "scheduledActionsForRule"
PAYLOAD_CONTENT_FIELD: Final[str] = "PayloadContent"
PAYLOAD_TYPE_FIELD: Final[str] = "PayloadType"

DEFAULT_COMPLIANCE_EXCLUDED_KEYS: Final[frozenset[str]] = frozenset(
    {
        "createdDateTime",
        "lastModifiedDateTime",
        "id",
        "displayName",
        "description",
        "version",
        RULE_SCHEDULING_FIELD,
    }
)
DEFAULT_PAYLOAD_EXCLUDED_KEYS: Final[frozenset[str]] = frozenset(
    {
        PAYLOAD_TYPE_FIELD,
        "PayloadVersion",
        "PayloadIdentifier",
        "PayloadUUID",
        "PayloadDisplayName",
        "PayloadDescription",
        "PayloadOrganization",
        "PayloadEnabled",
    }
)


@runtime_checkable
class SettingsAdapter(Protocol):
    """Capability to recognise a document shape and extract its leaf settings."""

    @property
    def name(self) -> str:
        """Return a short identifier used in diagnostics."""
        ...

    def matches(self, document: Any) -> bool:
        """Return ``True`` when ``document`` has the shape handled by the adapter."""
        ...

    def extract(self, document: Any) -> list[SettingRecord]:
        """Return the leaf settings found in ``document``."""
        ...


def _sequence(value: Any) -> Sequence[Any]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    return ()


@dataclass(slots=True)
class SettingsCatalogAdapter:
    """Extract leaves from Settings Catalog exports (``settings[].settingInstance``)."""

    separator: str = PATH_SEPARATOR

    @property
    def name(self) -> str:
        return "settings-catalog"

    def matches(self, document: Any) -> bool:
        return isinstance(document, Mapping) and isinstance(document.get(SETTINGS_FIELD), list)

    def extract(self, document: Any) -> list[SettingRecord]:
        if not self.matches(document):
            return []
        walker = TreeWalker(separator=self.separator)
        return walker.walk(self._instances(document[SETTINGS_FIELD]))

    @staticmethod
    def _instances(entries: Iterable[Any]) -> Iterable[Any]:
        for entry in entries:
            if not isinstance(entry, Mapping):
                continue
            instance = entry.get(SETTING_INSTANCE_FIELD)
            yield instance if isinstance(instance, Mapping) else entry


@dataclass(slots=True)
class CompliancePolicyAdapter:
    """Treat each non-metadata top-level property of a compliance policy as a setting."""

    excluded_keys: frozenset[str] = field(default_factory=lambda: DEFAULT_COMPLIANCE_EXCLUDED_KEYS)

    @property
    def name(self) -> str:
        return "compliance-policy"

    def matches(self, document: Any) -> bool:
        return isinstance(document, Mapping) and RULE_SCHEDULING_FIELD in document

    def extract(self, document: Any) -> list[SettingRecord]:
        if not self.matches(document):
            return []
        return [
            SettingRecord(setting_id=str(key), value=value, path=str(key))
            for key, value in document.items()
            if key not in self.excluded_keys
        ]


@dataclass(slots=True)
class PayloadBundleAdapter:
    """Extract ``<PayloadType>.<property>`` settings from configuration profiles."""

    excluded_keys: frozenset[str] = field(default_factory=lambda: DEFAULT_PAYLOAD_EXCLUDED_KEYS)

    @property
    def name(self) -> str:
        return "payload-bundle"

    def matches(self, document: Any) -> bool:
        return isinstance(document, Mapping) and isinstance(document.get(PAYLOAD_CONTENT_FIELD), list)

    def extract(self, document: Any) -> list[SettingRecord]:
        if not self.matches(document):
            return []
        records: list[SettingRecord] = []
        for payload in _sequence(document[PAYLOAD_CONTENT_FIELD]):
            if not isinstance(payload, Mapping):
                continue
            payload_type = payload.get(PAYLOAD_TYPE_FIELD)
            if not isinstance(payload_type, str) or not payload_type:
                payload_type = UNKNOWN_TYPE
            for key, value in payload.items():
                if key in self.excluded_keys:
                    continue
                setting_id = f"{payload_type}.{key}"
                records.append(SettingRecord(setting_id=setting_id, value=value, path=setting_id))
        return records


@dataclass(slots=True)
class AdapterRegistry:
    """Ordered adapter set; the first adapter matching a document wins."""

    adapters: tuple[SettingsAdapter, ...]

    @classmethod
    def default(
        cls,
        *,
        separator: str = PATH_SEPARATOR,
        compliance_excluded_keys: Iterable[str] | None = None,
        payload_excluded_keys: Iterable[str] | None = None,
    ) -> AdapterRegistry:
        """Return the built-in adapters in selection order.

        Args:
            separator: Path separator used by the Settings Catalog walker.
            compliance_excluded_keys: Override for compliance metadata keys.
            payload_excluded_keys: Override for payload metadata keys.

        Returns:
            AdapterRegistry: Registry holding catalog, compliance and payload adapters.
        """

        compliance = (
            frozenset(compliance_excluded_keys)
            if compliance_excluded_keys is not None
            else DEFAULT_COMPLIANCE_EXCLUDED_KEYS
        )
        payload = (
            frozenset(payload_excluded_keys) if payload_excluded_keys is not None else DEFAULT_PAYLOAD_EXCLUDED_KEYS
        )
        return cls(
            adapters=(
                SettingsCatalogAdapter(separator=separator),
                CompliancePolicyAdapter(excluded_keys=compliance),
                PayloadBundleAdapter(excluded_keys=payload),
            )
        )

    def select(self, document: Any) -> SettingsAdapter | None:
        """Return the first adapter recognising ``document``."""

        for adapter in self.adapters:
            if adapter.matches(document):
                return adapter
        return None

    def extract(self, document: Any, *, context: str = "<document>") -> list[SettingRecord]:
        """Return records for ``document``; unrecognised shapes yield nothing.

        Args:
            document: Parsed document payload.
            context: Label used in debug logging.

        Returns:
            list[SettingRecord]: Records produced by the selected adapter.
        """

        adapter = self.select(document)
        if adapter is None:
            LOGGER.debug("no adapter recognises %s; skipping", context)
            return []
        records = adapter.extract(document)
        LOGGER.debug("%s adapter produced %d settings for %s", adapter.name, len(records), context)
        return records


__all__ = [
    "AdapterRegistry",
    "CompliancePolicyAdapter",
    "DEFAULT_COMPLIANCE_EXCLUDED_KEYS",
    "DEFAULT_PAYLOAD_EXCLUDED_KEYS",
    "PayloadBundleAdapter",
    "SettingsAdapter",
    "SettingsCatalogAdapter",
]
