"""Filters that run scripts, join multiline records, parse fields and throttle."""

from __future__ import annotations

from dataclasses import dataclass, field

from .base import (
    CommonParams,
    ConfigMapKeySelector,
    KVs,
    Plugin,
    SecretLoader,
    render_value,
)


@dataclass
class Lua(CommonParams, Plugin):
    """Modifies records with a Lua script kept in a config map."""

    script: ConfigMapKeySelector = field(default_factory=ConfigMapKeySelector)
    call: str = ""
    type_int_key: list[str] = field(default_factory=list)
    protected_mode: bool | None = None
    time_as_table: bool = False

    def name(self) -> str:
        return "lua"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        self.add_common_params(kvs)
        kvs.insert("script", "/fluent-bit/config/" + self.script.key)
        kvs.insert("call", self.call)
        if self.type_int_key:
            kvs.insert("type_int_key", " ".join(self.type_int_key))
        if self.protected_mode is not None:
            kvs.insert("protected_mode", render_value(self.protected_mode))
        if self.time_as_table:
            kvs.insert("time_as_table", "true")
        return kvs


@dataclass
class Multi:
    """Multiline parser selection for the multiline filter."""

    parser: str = ""
    key_content: str = ""


@dataclass
class Multiline(CommonParams, Plugin):
    """Concatenates messages split across several records."""

    multi: Multi | None = None

    def name(self) -> str:
        return "multiline"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        self.add_common_params(kvs)
        if self.multi is not None:
            if self.multi.parser:
                kvs.insert("multiline.parser", self.multi.parser)
            if self.multi.key_content:
                kvs.insert("multiline.key_content", self.multi.key_content)
        return kvs


@dataclass
class Parser(CommonParams, Plugin):
    """Parses a field of each record with one or more named parsers."""

    key_name: str = ""
    parser: str = ""
    preserve_key: bool | None = None
    reserve_data: bool | None = None
    unescape_key: bool | None = None

    def name(self) -> str:
        return "parser"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        self.add_common_params(kvs)
        if self.key_name:
            kvs.insert("Key_Name", self.key_name)
        if self.parser:
            for name in self.parser.split(","):
                kvs.insert("Parser", name.strip(" "))
        for key, value in (
            ("Preserve_Key", self.preserve_key),
            ("Reserve_Data", self.reserve_data),
            ("Unescape_Key", self.unescape_key),
        ):
            if value is not None:
                kvs.insert(key, render_value(value))
        return kvs


@dataclass
class Throttle(CommonParams, Plugin):
    """Limits the average rate of records per interval."""

    rate: int | None = None
    window: int | None = None
    interval: str = ""
    print_status: bool | None = None

    def name(self) -> str:
        return "throttle"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        self.add_common_params(kvs)
        if self.rate is not None:
            kvs.insert("Rate", render_value(self.rate))
        if self.window is not None:
            kvs.insert("Window", render_value(self.window))
        if self.interval:
            kvs.insert("Interval", self.interval)
        if self.print_status is not None:
            kvs.insert("Print_Status", render_value(self.print_status))
        return kvs