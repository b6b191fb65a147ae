"""Filters that change, add, remove, re-tag or nest record fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from .base import CommonParams, KVs, Plugin, SecretLoader


def _insert_pairs(kvs: KVs, key: str, prefix: str, mapping: Mapping[str, str] | None) -> None:
    """Insert ``key`` once per entry of ``mapping`` as ``prefix KEY    VALUE``."""
    kvs.insert_string_map(mapping, lambda k, v: (key, f"{prefix}{k}    {v}"))


@dataclass
class Condition:
    """Conditions that must all hold before the modify rules apply."""

    key_exists: str = ""
    key_does_not_exist: dict[str, str] = field(default_factory=dict)
    a_key_matches: str = ""
    no_key_matches: str = ""
    key_value_equals: dict[str, str] = field(default_factory=dict)
    key_value_does_not_equal: dict[str, str] = field(default_factory=dict)
    key_value_matches: dict[str, str] = field(default_factory=dict)
    key_value_does_not_match: dict[str, str] = field(default_factory=dict)
    matching_keys_have_matching_values: dict[str, str] = field(default_factory=dict)
    matching_keys_do_not_have_matching_values: dict[str, str] = field(default_factory=dict)

    def _insert_into(self, kvs: KVs) -> None:
        if self.key_exists:
            kvs.insert("Condition", f"Key_exists    {self.key_exists}")
        _insert_pairs(kvs, "Condition", "Key_does_not_exist    ", self.key_does_not_exist)
        if self.a_key_matches:
            kvs.insert("Condition", f"A_key_matches    {self.a_key_matches}")
        if self.no_key_matches:
            kvs.insert("Condition", f"No_key_matches    {self.no_key_matches}")
        _insert_pairs(kvs, "Condition", "Key_value_equals    ", self.key_value_equals)
        _insert_pairs(kvs, "Condition", "Key_value_does_not_equal    ", self.key_value_does_not_equal)
        _insert_pairs(kvs, "Condition", "Key_value_matches    ", self.key_value_matches)
        _insert_pairs(kvs, "Condition", "Key_value_does_not_match    ", self.key_value_does_not_match)
        _insert_pairs(
            kvs,
            "Condition",
            "Matching_keys_have_matching_values    ",
            self.matching_keys_have_matching_values,
        )
        _insert_pairs(
            kvs,
            "Condition",
            "Matching_keys_do_not_have_matching_values    ",
            self.matching_keys_do_not_have_matching_values,
        )


@dataclass
class Rule:
    """Modifications applied in order, each on the result of the previous one."""

    set: dict[str, str] = field(default_factory=dict)
    add: dict[str, str] = field(default_factory=dict)
    remove: str = ""
    remove_wildcard: str = ""
    remove_regex: str = ""
    rename: dict[str, str] = field(default_factory=dict)
    hard_rename: dict[str, str] = field(default_factory=dict)
    copy: dict[str, str] = field(default_factory=dict)
    hard_copy: dict[str, str] = field(default_factory=dict)

    def _insert_into(self, kvs: KVs) -> None:
        _insert_pairs(kvs, "Set", "", self.set)
        _insert_pairs(kvs, "Add", "", self.add)
        if self.remove:
            kvs.insert("Remove", self.remove)
        if self.remove_wildcard:
            kvs.insert("Remove_wildcard", self.remove_wildcard)
        if self.remove_regex:
            kvs.insert("Remove_regex", self.remove_regex)
        _insert_pairs(kvs, "Rename", "", self.rename)
        _insert_pairs(kvs, "Hard_rename", "", self.hard_rename)
        _insert_pairs(kvs, "Copy", "", self.copy)
        _insert_pairs(kvs, "Hard_copy", "", self.hard_copy)


@dataclass
class Modify(CommonParams, Plugin):
    """Changes records using rules and conditions."""

    conditions: list[Condition] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)

    def name(self) -> str:
        return "modify"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        self.add_common_params(kvs)
        for condition in self.conditions:
            condition._insert_into(kvs)
        for rule in self.rules:
            rule._insert_into(kvs)
        return kvs


@dataclass
class RecordModifier(CommonParams, Plugin):
    """Appends fields to records or removes fields from them."""

    records: list[str] = field(default_factory=list)
    remove_keys: list[str] = field(default_factory=list)
    allowlist_keys: list[str] = field(default_factory=list)
    whitelist_keys: list[str] = field(default_factory=list)
    uuid_keys: list[str] = field(default_factory=list)

    def name(self) -> str:
        return "record_modifier"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        self.add_common_params(kvs)
        for key, values in (
            ("Record", self.records),
            ("Remove_key", self.remove_keys),
            ("Allowlist_key", self.allowlist_keys),
            ("Whitelist_key", self.whitelist_keys),
            ("Uuid_key", self.uuid_keys),
        ):
            for value in values:
                kvs.insert(key, value)
        return kvs


@dataclass
class RewriteTag(CommonParams, Plugin):
    """Re-emits matching records under a new tag."""

    rules: list[str] = field(default_factory=list)
    emitter_name: str = ""

    def name(self) -> str:
        return "rewrite_tag"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        self.add_common_params(kvs)
        for rule in self.rules:
            kvs.insert("Rule", rule)
        if self.emitter_name:
            kvs.insert("Emitter_Name", self.emitter_name)
        return kvs


@dataclass
class Nest(CommonParams, Plugin):
    """Nests fields under a key or lifts nested fields up."""

    operation: str = ""
    wildcard: list[str] = field(default_factory=list)
    nest_under: str = ""
    nested_under: str = ""
    add_prefix: str = ""
    remove_prefix: str = ""

    def name(self) -> str:
        return "nest"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        self.add_common_params(kvs)
        if self.operation:
            kvs.insert("Operation", self.operation)
        for pattern in self.wildcard:
            kvs.insert("Wildcard", pattern)
        for key, value in (
            ("Nest_under", self.nest_under),
            ("Nested_under", self.nested_under),
            ("Add_prefix", self.add_prefix),
            ("Remove_prefix", self.remove_prefix),
        ):
            if value:
                kvs.insert(key, value)
        return kvs