"""Inputs that tail files, read the systemd journal or generate dummy events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .base import KVs, Plugin, SecretLoader, render_value


def _insert_set(kvs: KVs, entries: Iterable[tuple[str, Any]]) -> None:
    """Insert every entry whose value is set (not None and not empty)."""
    for key, value in entries:
        if value is not None and value != "":
            kvs.insert(key, render_value(value))


def _code_point_text(number: int) -> str:
    """Render an integer as the single character with that code point."""
    if number > 0x10FFFF or 0xD800 <= number <= 0xDFFF:
        return "\ufffd"
    return chr(number)


@dataclass
class Tail(Plugin):
    """Monitors one or several text files, like ``tail -f``."""

    buffer_chunk_size: str = ""
    buffer_max_size: str = ""
    path: str = ""
    path_key: str = ""
    exclude_path: str = ""
    read_from_head: bool | None = None
    refresh_interval_seconds: int | None = None
    rotate_wait_seconds: int | None = None
    ignore_older: str = ""
    skip_long_lines: bool | None = None
    db: str = ""
    db_sync: str = ""
    mem_buf_limit: str = ""
    parser: str = ""
    key: str = ""
    tag: str = ""
    tag_regex: str = ""
    multiline: bool | None = None
    multiline_flush_seconds: int | None = None
    parser_firstline: str = ""
    parser_n: list[str] = field(default_factory=list)
    docker_mode: bool | None = None
    docker_mode_flush_seconds: int | None = None
    docker_mode_parser: str = ""
    disable_inotify_watcher: bool | None = None
    multiline_parser: str = ""
    storage_type: str = ""
    pause_on_chunks_overlimit: str = ""

    def name(self) -> str:
        return "tail"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        _insert_set(kvs, (
            ("Buffer_Chunk_Size", self.buffer_chunk_size),
            ("Buffer_Max_Size", self.buffer_max_size),
            ("Path", self.path),
            ("Path_Key", self.path_key),
            ("Exclude_Path", self.exclude_path),
            ("Read_from_Head", self.read_from_head),
            ("Refresh_Interval", self.refresh_interval_seconds),
            ("Rotate_Wait", self.rotate_wait_seconds),
            ("Ignore_Older", self.ignore_older),
            ("Skip_Long_Lines", self.skip_long_lines),
            ("DB", self.db),
            ("DB.Sync", self.db_sync),
            ("Mem_Buf_Limit", self.mem_buf_limit),
            ("Parser", self.parser),
            ("Key", self.key),
            ("Tag", self.tag),
            ("Tag_Regex", self.tag_regex),
            ("Multiline", self.multiline),
            ("Multiline_Flush", self.multiline_flush_seconds),
            ("Parser_Firstline", self.parser_firstline),
        ))
        for number, parser in enumerate(self.parser_n, start=1):
            kvs.insert(f"Parser_{number}", parser)
        inotify = None if self.disable_inotify_watcher is None else not self.disable_inotify_watcher
        _insert_set(kvs, (
            ("Docker_Mode", self.docker_mode),
            ("Docker_Mode_Flush", self.docker_mode_flush_seconds),
            ("Docker_Mode_Parser", self.docker_mode_parser),
            ("Inotify_Watcher", inotify),
            ("multiline.parser", self.multiline_parser),
            ("storage.type", self.storage_type),
            ("storage.pause_on_chunks_overlimit", self.pause_on_chunks_overlimit),
        ))
        return kvs


@dataclass
class Systemd(Plugin):
    """Collects log messages from the systemd journal."""

    path: str = ""
    db: str = ""
    db_sync: str = ""
    tag: str = ""
    max_fields: int = 0
    max_entries: int = 0
    systemd_filter: list[str] = field(default_factory=list)
    systemd_filter_type: str = ""
    read_from_tail: str = ""
    strip_underscores: str = ""
    storage_type: str = ""
    pause_on_chunks_overlimit: str = ""

    def name(self) -> str:
        return "systemd"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        _insert_set(kvs, (
            ("Path", self.path),
            ("DB", self.db),
            ("DB.Sync", self.db_sync),
            ("Tag", self.tag),
        ))
        # The limits are written as the character with that code point.
        if self.max_fields > 0:
            kvs.insert("Max_Fields", _code_point_text(self.max_fields))
        if self.max_entries > 0:
            kvs.insert("Max_Entries", _code_point_text(self.max_entries))
        for query in self.systemd_filter:
            kvs.insert("Systemd_Filter", query)
        _insert_set(kvs, (
            ("Systemd_Filter_Type", self.systemd_filter_type),
            ("Read_From_Tail", self.read_from_tail),
            ("Strip_Underscores", self.strip_underscores),
            ("storage.type", self.storage_type),
            ("storage.pause_on_chunks_overlimit", self.pause_on_chunks_overlimit),
        ))
        return kvs


@dataclass
class Dummy(Plugin):
    """Generates dummy events."""

    tag: str = ""
    dummy: str = ""
    rate: int | None = None
    samples: int | None = None

    def name(self) -> str:
        return "dummy"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        _insert_set(kvs, (
            ("Tag", self.tag),
            ("Dummy", self.dummy),
            ("Rate", self.rate),
            ("Samples", self.samples),
        ))
        return kvs