"""Inputs that listen on the network: forward, HTTP and OpenTelemetry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from .base import KVs, Plugin, SecretLoader, render_value


class ParamSource(Protocol):
    """Anything that renders extra parameters, such as a TLS configuration."""

    def params(self, secret_loader: SecretLoader) -> KVs:
        """Return the parameters to merge into a section."""
        ...


def _insert_set(kvs: KVs, entries: Iterable[tuple[str, Any]]) -> None:
    """Insert every entry whose value is set (not None and not empty)."""
    for key, value in entries:
        if value is not None and value != "":
            kvs.insert(key, render_value(value))


@dataclass
class Forward(Plugin):
    """Listens on a TCP socket for the forward event stream."""

    port: int | None = None
    listen: str = ""
    tag: str = ""
    tag_prefix: str = ""
    unix_path: str = ""
    unix_perm: str = ""
    buffer_max_size: str = ""
    buffer_chunk_size: str = ""
    threaded: str = ""

    def name(self) -> str:
        return "forward"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        _insert_set(kvs, (
            ("Port", self.port),
            ("Listen", self.listen),
            ("Tag", self.tag),
            ("Tag_Prefix", self.tag_prefix),
            ("Unix_Path", self.unix_path),
            ("Unix_Perm", self.unix_perm),
            ("Buffer_Chunk_Size", self.buffer_chunk_size),
            ("Buffer_Max_Size", self.buffer_max_size),
            ("threaded", self.threaded),
        ))
        return kvs


@dataclass
class HTTP(Plugin):
    """Receives custom records on an HTTP endpoint."""

    listen: str = ""
    port: int | None = None
    tag_key: str = ""
    buffer_max_size: str = ""
    buffer_chunk_size: str = ""
    successful_response_code: int | None = None
    successful_header: str = ""
    tls: ParamSource | None = None

    def name(self) -> str:
        return "http"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        _insert_set(kvs, (
            ("listen", self.listen),
            ("port", self.port),
            ("tag_key", self.tag_key),
            ("buffer_max_size", self.buffer_max_size),
            ("buffer_chunk_size", self.buffer_chunk_size),
            ("successful_response_code", self.successful_response_code),
            ("success_header", self.successful_header),
        ))
        if self.tls is not None:
            kvs.merge(self.tls.params(secret_loader))
        return kvs


@dataclass
class OpenTelemetry(Plugin):
    """Ingests telemetry data following the OTLP specification."""

    listen: str = ""
    port: int | None = None
    tag_key: str = ""
    raw_traces: bool | None = None
    buffer_max_size: str = ""
    buffer_chunk_size: str = ""
    successful_response_code: int | None = None

    def name(self) -> str:
        return "opentelemetry"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        _insert_set(kvs, (
            ("listen", self.listen),
            ("port", self.port),
            ("tag_key", self.tag_key),
            ("raw_traces", self.raw_traces),
            ("buffer_max_size", self.buffer_max_size),
            ("buffer_chunk_size", self.buffer_chunk_size),
            ("successful_response_code", self.successful_response_code),
        ))
        return kvs