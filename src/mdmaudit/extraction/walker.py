# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Recursive flattening of Settings Catalog setting-instance trees.

Settings Catalog exports describe configuration as nested setting instances:
choice settings carry child instances, group collections bundle several
children per entry and simple collections hold arrays of scalar wrappers. The
walker reduces any such tree to a flat list of leaf :class:`SettingRecord`
objects whose ``path`` keeps the full chain of identifiers from the root.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

from ..models import SettingRecord
from ..types import PATH_SEPARATOR

ID_FIELD: Final[str] = "settingDefinitionId"
CHILDREN_FIELD: Final[str] = "children"
GROUP_COLLECTION_FIELD: Final[str] = "groupSettingCollectionValue"
GROUP_VALUE_FIELD: Final[str] = "groupSettingValue"
CHOICE_VALUE_FIELD: Final[str] = "choiceSettingValue"
WRAPPED_VALUE_FIELD: Final[str] = "value"
SCALAR_COLLECTION_FIELDS: Final[tuple[str, ...]] = (
    "simpleSettingCollectionValue",
    "choiceSettingCollectionValue",
)
CHILD_COLLECTION_FIELDS: Final[tuple[str, ...]] = (
    GROUP_COLLECTION_FIELD,
    GROUP_VALUE_FIELD,
    CHILDREN_FIELD,
    *SCALAR_COLLECTION_FIELDS,
)

_MISSING: Final = object()


@dataclass(frozen=True, slots=True)
class SettingNode:
    """Schema-less view over one JSON object with optional-field lookup."""

    payload: Mapping[str, Any]

    @classmethod
    def wrap(cls, raw: Any) -> SettingNode | None:
        """Return a node for ``raw`` when it is a JSON object, else ``None``."""

        return cls(raw) if isinstance(raw, Mapping) else None

    def field(self, key: str) -> Any:
        """Return the raw value stored under ``key`` or ``None``."""

        return self.payload.get(key)

    def has(self, key: str) -> bool:
        """Return ``True`` when ``key`` is present with a non-null value."""

        return self.payload.get(key) is not None

    def text(self, key: str) -> str | None:
        """Return ``key`` as a non-empty string, otherwise ``None``."""

        raw = self.payload.get(key)
        if isinstance(raw, str) and raw:
            return raw
        return None

    def mapping(self, key: str) -> SettingNode | None:
        """Return the object stored under ``key`` wrapped as a node."""

        return SettingNode.wrap(self.payload.get(key))

    def items(self, key: str) -> tuple[Any, ...]:
        """Return the raw elements of the array stored under ``key``."""

        raw = self.payload.get(key)
        if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes, bytearray)):
            return tuple(raw)
        return ()

    def nodes(self, key: str) -> tuple[SettingNode, ...]:
        """Return the object elements of the array stored under ``key``."""

        return tuple(node for node in map(SettingNode.wrap, self.items(key)) if node is not None)


@dataclass(frozen=True, slots=True)
class ValueRule:
    """Read a candidate value from one field, unwrapping a single-value object."""

    field: str

    def extract(self, node: SettingNode) -> Any:
        """Return the field's value, ``_MISSING`` when the field is absent."""

        raw = node.field(self.field)
        if raw is None:
            return _MISSING
        if isinstance(raw, Mapping):
            return raw.get(WRAPPED_VALUE_FIELD)
        return raw


# Order matters: the first rule whose field is present wins.
VALUE_RULES: Final[tuple[ValueRule, ...]] = (
    ValueRule(CHOICE_VALUE_FIELD),
    ValueRule("simpleSettingValue"),
    ValueRule(WRAPPED_VALUE_FIELD),
)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def extract_scalar(node: SettingNode) -> Any:
    """Return the scalar value carried by ``node`` or ``_MISSING``.

    Args:
        node: Setting instance to inspect.

    Returns:
        Any: Scalar from the first matching value rule, ``_MISSING`` when no
        rule matches or the matching rule does not resolve to a scalar.
    """

    for rule in VALUE_RULES:
        candidate = rule.extract(node)
        if candidate is _MISSING:
            continue
        return candidate if _is_scalar(candidate) else _MISSING
    return _MISSING


def has_value(value: Any) -> bool:
    """Return ``True`` when ``value`` came from :func:`extract_scalar` successfully."""

    return value is not _MISSING


def is_collection_container(node: SettingNode, value: Any) -> bool:
    """Return ``True`` when ``node`` only groups other settings.

    Args:
        node: Setting instance to classify.
        value: Result of :func:`extract_scalar` for ``node``.

    Returns:
        bool: ``True`` when a child-collection field is present and no scalar
        value was extracted.
    """

    if has_value(value):
        return False
    return any(node.has(name) for name in CHILD_COLLECTION_FIELDS)


class TreeWalker:
    """Flatten setting-instance trees into leaf records."""

    def __init__(self, *, separator: str = PATH_SEPARATOR) -> None:
        self.separator = separator

    def walk(self, nodes: Iterable[Any], parent_path: str = "") -> list[SettingRecord]:
        """Return leaf records for ``nodes`` and everything nested below them.

        Args:
            nodes: Raw setting-instance objects; non-objects are ignored.
            parent_path: Breadcrumb accumulated by the caller.

        Returns:
            list[SettingRecord]: Leaf records in document order.
        """

        records: list[SettingRecord] = []
        for raw in nodes:
            node = SettingNode.wrap(raw)
            if node is not None:
                self._visit(node, parent_path, records)
        return records

    def join(self, parent_path: str, segment: str) -> str:
        """Return ``segment`` appended to ``parent_path``."""

        if not parent_path:
            return segment
        return f"{parent_path}{self.separator}{segment}"

    def _visit(self, node: SettingNode, parent_path: str, records: list[SettingRecord]) -> None:
        setting_id = node.text(ID_FIELD)
        value = extract_scalar(node)
        node_path = self.join(parent_path, setting_id) if setting_id else parent_path

        if setting_id and has_value(value) and not is_collection_container(node, value):
            records.append(SettingRecord(setting_id=setting_id, value=value, path=node_path))

        self._descend(node.nodes(CHILDREN_FIELD), node_path, records)
        for holder in (node.mapping(CHOICE_VALUE_FIELD), node.mapping(GROUP_VALUE_FIELD)):
            if holder is not None:
                self._descend(holder.nodes(CHILDREN_FIELD), node_path, records)
        for group in node.nodes(GROUP_COLLECTION_FIELD):
            self._descend(group.nodes(CHILDREN_FIELD), node_path, records)
        for name in SCALAR_COLLECTION_FIELDS:
            self._expand_scalars(node.items(name), setting_id, node_path, records)

    def _descend(self, children: Iterable[SettingNode], path: str, records: list[SettingRecord]) -> None:
        for child in children:
            self._visit(child, path, records)

    def _expand_scalars(
        self,
        elements: Sequence[Any],
        setting_id: str | None,
        node_path: str,
        records: list[SettingRecord],
    ) -> None:
        """Emit one indexed record per scalar wrapper in ``elements``.

        Args:
            elements: Raw array elements of a scalar collection.
            setting_id: Identifier of the owning instance.
            node_path: Path of the owning instance.
            records: Accumulator receiving the records.
        """

        for index, element in enumerate(elements):
            wrapper = SettingNode.wrap(element)
            if wrapper is not None and wrapper.has(ID_FIELD):
                # Full instance nodes nested in a collection are walked normally.
                self._visit(wrapper, node_path, records)
                continue
            value = wrapper.field(WRAPPED_VALUE_FIELD) if wrapper is not None else element
            if setting_id and _is_scalar(value):
                suffix = f"[{index}]"
                records.append(
                    SettingRecord(
                        setting_id=f"{setting_id}{suffix}",
                        value=value,
                        path=f"{node_path}{suffix}",
                    )
                )
            if wrapper is not None:
                self._descend(wrapper.nodes(CHILDREN_FIELD), node_path, records)


def walk_instances(
    nodes: Iterable[Any],
    parent_path: str = "",
    *,
    separator: str = PATH_SEPARATOR,
) -> list[SettingRecord]:
    """Return leaf records for ``nodes`` using a fresh :class:`TreeWalker`."""

    return TreeWalker(separator=separator).walk(nodes, parent_path)


__all__ = [
    "CHILD_COLLECTION_FIELDS",
    "SettingNode",
    "TreeWalker",
    "VALUE_RULES",
    "ValueRule",
    "extract_scalar",
    "has_value",
    "is_collection_container",
    "walk_instances",
]
