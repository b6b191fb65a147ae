"""Output resources and their rendering as [Output] sections."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from .base import ObjectMeta, Plugin, SecretLoader
from .custom import (
    CustomPlugin,
    make_custom_config_namespaced,
    namespaced_match,
    namespaced_match_regex,
)


@dataclass
class OutputSpec:
    """Desired state of an output: tag matching plus the output plugins."""

    match: str = ""
    match_regex: str = ""
    alias: str = ""
    log_level: str = ""
    azure_blob: Plugin | None = None
    azure_log_analytics: Plugin | None = None
    cloud_watch: Plugin | None = None
    retry_limit: str = ""
    elasticsearch: Plugin | None = None
    file: Plugin | None = None
    forward: Plugin | None = None
    http: Plugin | None = None
    kafka: Plugin | None = None
    null: Plugin | None = None
    stdout: Plugin | None = None
    tcp: Plugin | None = None
    loki: Plugin | None = None
    syslog: Plugin | None = None
    influx_db: Plugin | None = None
    data_dog: Plugin | None = None
    firehose: Plugin | None = None
    kinesis: Plugin | None = None
    stackdriver: Plugin | None = None
    splunk: Plugin | None = None
    open_search: Plugin | None = None
    open_telemetry: Plugin | None = None
    prometheus_exporter: Plugin | None = None
    prometheus_remote_write: Plugin | None = None
    s3: Plugin | None = None
    gelf: Plugin | None = None
    custom_plugin: CustomPlugin | None = None

    def plugins(self) -> list[Plugin]:
        """The configured plugins, in declaration order."""
        candidates = (
            self.azure_blob,
            self.azure_log_analytics,
            self.cloud_watch,
            self.elasticsearch,
            self.file,
            self.forward,
            self.http,
            self.kafka,
            self.null,
            self.stdout,
            self.tcp,
            self.loki,
            self.syslog,
            self.influx_db,
            self.data_dog,
            self.firehose,
            self.kinesis,
            self.stackdriver,
            self.splunk,
            self.open_search,
            self.open_telemetry,
            self.prometheus_exporter,
            self.prometheus_remote_write,
            self.s3,
            self.gelf,
            self.custom_plugin,
        )
        return [plugin for plugin in candidates if plugin is not None]


@dataclass
class ClusterOutput:
    """A cluster-level output configuration."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: OutputSpec = field(default_factory=OutputSpec)


@dataclass
class ClusterOutputList:
    """A list of cluster outputs."""

    items: list[ClusterOutput] = field(default_factory=list)

    def load(self, secret_loader: SecretLoader) -> str:
        """Render all outputs, ordered by name, as [Output] sections."""
        out: list[str] = []
        for item in sorted(self.items, key=lambda i: i.metadata.name):
            spec = item.spec
            for plugin in spec.plugins():
                out.append("[Output]\n")
                name = plugin.name()
                if name:
                    out.append(f"    Name    {name}\n")
                if spec.match:
                    out.append(f"    Match    {spec.match}\n")
                if spec.log_level:
                    out.append(f"    Log_Level    {spec.log_level}\n")
                if spec.match_regex:
                    out.append(f"    Match_Regex    {spec.match_regex}\n")
                if spec.alias:
                    out.append(f"    Alias    {spec.alias}\n")
                if spec.retry_limit:
                    out.append(f"    Retry_Limit    {spec.retry_limit}\n")
                out.append(str(plugin.params(secret_loader)))
        return "".join(out)


@dataclass
class Output:
    """A namespaced output configuration."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: OutputSpec = field(default_factory=OutputSpec)


@dataclass
class OutputList:
    """A list of namespaced outputs."""

    items: list[Output] = field(default_factory=list)

    def load(self, secret_loader: SecretLoader) -> str:
        """Render outputs with matches scoped to their namespace."""
        out: list[str] = []
        for item in sorted(self.items, key=lambda i: i.metadata.name):
            spec = item.spec
            namespace = item.metadata.namespace
            for plugin in spec.plugins():
                out.append("[Output]\n")
                name = plugin.name()
                if name:
                    out.append(f"    Name    {name}\n")
                if spec.match:
                    out.append(f"    Match    {namespaced_match(namespace, spec.match)}\n")
                if spec.match_regex:
                    regex = namespaced_match_regex(namespace, spec.match_regex)
                    out.append(f"    Match_Regex    {regex}\n")
                if spec.alias:
                    out.append(f"    Alias    {spec.alias}\n")
                if spec.retry_limit:
                    out.append(f"    Retry_Limit    {spec.retry_limit}\n")
                if isinstance(plugin, CustomPlugin) and plugin.config:
                    plugin = dataclasses.replace(
                        plugin, config=make_custom_config_namespaced(plugin.config, namespace)
                    )
                out.append(str(plugin.params(secret_loader)))
        return "".join(out)