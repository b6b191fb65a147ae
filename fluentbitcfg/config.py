"""Top-level Fluent Bit configuration: service section, main config, parsers and scripts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .base import ConfigMapLoader, KVs, ObjectMeta, SecretLoader, render_value
from .filter_sections import ClusterFilterList, FilterList
from .input_sections import ClusterInputList
from .output_sections import ClusterOutputList, OutputList
from .parser_sections import ClusterParserList, ParserList

GROUP = "fluentbit.fluent.io"
VERSION = "v1alpha2"
API_VERSION = f"{GROUP}/{VERSION}"

_NULL_OUTPUT = "[Output]\n    Name    null\n    Match   *"


def _insert_set(kvs: KVs, entries: Iterable[tuple[str, Any]]) -> None:
    """Insert every entry whose value is set (not None and not empty)."""
    for key, value in entries:
        if value is not None and value != "":
            kvs.insert(key, render_value(value))


@dataclass
class Storage:
    """Global settings of the storage layer."""

    path: str = ""
    sync: str = ""
    checksum: str = ""
    backlog_mem_limit: str = ""
    max_chunks_up: int | None = None
    metrics: str = ""
    delete_irrecoverable_chunks: str = ""


@dataclass
class Service:
    """Global behaviour of the Fluent Bit engine."""

    daemon: bool | None = None
    flush_seconds: int | None = None
    grace_seconds: int | None = None
    hc_errors_count: int | None = None
    hc_retry_failure_count: int | None = None
    hc_period: int | None = None
    health_check: bool | None = None
    http_listen: str = ""
    http_port: int | None = None
    http_server: bool | None = None
    log_file: str = ""
    log_level: str = ""
    parsers_file: str = ""
    storage: Storage | None = None

    def params(self) -> KVs:
        """The parameters of the [Service] section."""
        kvs = KVs()
        _insert_set(kvs, (
            ("Daemon", self.daemon),
            ("Flush", self.flush_seconds),
            ("Grace", self.grace_seconds),
            ("HC_Errors_Count", self.hc_errors_count),
            ("HC_Retry_Failure_Count", self.hc_retry_failure_count),
            ("HC_Period", self.hc_period),
            ("Health_Check", self.health_check),
            ("Http_Listen", self.http_listen),
            ("Http_Port", self.http_port),
            ("Http_Server", self.http_server),
            ("Log_File", self.log_file),
            ("Log_Level", self.log_level),
            ("Parsers_File", self.parsers_file),
        ))
        storage = self.storage
        if storage is not None:
            _insert_set(kvs, (
                ("storage.path", storage.path),
                ("storage.sync", storage.sync),
                ("storage.checksum", storage.checksum),
                ("storage.backlog.mem_limit", storage.backlog_mem_limit),
                ("storage.metrics", storage.metrics),
                ("storage.max_chunks_up", storage.max_chunks_up),
                ("storage.delete_irrecoverable_chunks", storage.delete_irrecoverable_chunks),
            ))
        return kvs


@dataclass
class FluentBitConfigSpec:
    """Desired state of a cluster-level Fluent Bit configuration.

    Selectors hold the labels that selected resources must carry.
    """

    service: Service | None = None
    input_selector: dict[str, str] = field(default_factory=dict)
    filter_selector: dict[str, str] = field(default_factory=dict)
    output_selector: dict[str, str] = field(default_factory=dict)
    parser_selector: dict[str, str] = field(default_factory=dict)
    namespace: str | None = None


@dataclass(frozen=True)
class Script:
    """A named script file and its content."""

    name: str
    content: str


@dataclass
class ClusterFluentBitConfig:
    """A cluster-level Fluent Bit configuration."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: FluentBitConfigSpec = field(default_factory=FluentBitConfigSpec)

    def render_main_config(
        self,
        secret_loader: SecretLoader,
        inputs: ClusterInputList,
        filters: ClusterFilterList,
        outputs: ClusterOutputList,
        ns_filter_lists: Iterable[FilterList] | None,
        ns_output_lists: Iterable[OutputList] | None,
        rewrite_tag_configs: Iterable[str] | None,
    ) -> str:
        """Render the main configuration file."""
        out: list[str] = []
        if self.spec.service is not None:
            out.append("[Service]\n")
            out.append(str(self.spec.service.params()))

        input_sections = inputs.load(secret_loader)
        filter_sections = filters.load(secret_loader)

        ns_filter_sections = [
            ns_list.load(secret_loader.with_namespace(ns_list.items[0].metadata.namespace))
            for ns_list in ns_filter_lists or ()
            if ns_list.items
        ]

        output_sections = outputs.load(secret_loader)
        ns_output_sections = [
            ns_list.load(secret_loader.with_namespace(ns_list.items[0].metadata.namespace))
            for ns_list in ns_output_lists or ()
            if ns_list.items
        ]

        if input_sections and not output_sections and not ns_output_sections:
            output_sections = _NULL_OUTPUT

        out.append(input_sections)
        out.append(filter_sections)
        out.extend(rewrite_tag_configs or ())
        out.extend(ns_filter_sections)
        out.extend(ns_output_sections)
        out.append(output_sections)
        return "".join(out)

    def render_parser_config(
        self,
        secret_loader: SecretLoader,
        parsers: ClusterParserList,
        ns_parser_lists: Iterable[ParserList] | None,
        ns_cluster_parser_lists: Iterable[ClusterParserList] | None,
    ) -> str:
        """Render the parsers file; each cluster parser name is written once."""
        existing: set[str] = set()
        out = [parsers.load(secret_loader, existing)]
        for ns_list in ns_parser_lists or ():
            if not ns_list.items:
                continue
            namespace = ns_list.items[0].metadata.namespace
            out.append(ns_list.load(secret_loader.with_namespace(namespace)))
        for cluster_list in ns_cluster_parser_lists or ():
            out.append(cluster_list.load(secret_loader, existing))
        return "".join(out)

    def render_lua_scripts(
        self,
        config_map_loader: ConfigMapLoader,
        filters: ClusterFilterList,
        namespace: str,
    ) -> list[Script]:
        """Load the Lua scripts used by the filters, ordered by name."""
        scripts = [
            Script(
                name=item.lua.script.key,
                content=config_map_loader.load_config_map(item.lua.script, namespace),
            )
            for cluster_filter in filters.items
            for item in cluster_filter.spec.filter_items
            if item.lua is not None
        ]
        scripts.sort(key=lambda script: script.name)
        return scripts


@dataclass
class NamespacedFluentBitCfgSpec:
    """Desired state of a namespaced Fluent Bit configuration."""

    filter_selector: dict[str, str] = field(default_factory=dict)
    output_selector: dict[str, str] = field(default_factory=dict)
    parser_selector: dict[str, str] = field(default_factory=dict)
    cluster_parser_selector: dict[str, str] = field(default_factory=dict)


@dataclass
class FluentBitConfig:
    """A namespaced Fluent Bit configuration."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: NamespacedFluentBitCfgSpec = field(default_factory=NamespacedFluentBitCfgSpec)