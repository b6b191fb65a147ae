"""Cluster-level input resources and their rendering as [Input] sections."""

from __future__ import annotations

from dataclasses import dataclass, field

from .base import ObjectMeta, Plugin, SecretLoader
from .custom import CustomPlugin
from .inputs_files import Dummy, Systemd, Tail
from .inputs_metrics import FluentbitMetrics, NodeExporterMetrics, PrometheusScrapeMetrics
from .inputs_net import HTTP, Forward, OpenTelemetry


@dataclass
class InputSpec:
    """Desired state of a cluster input."""

    alias: str = ""
    log_level: str = ""
    dummy: Dummy | None = None
    tail: Tail | None = None
    systemd: Systemd | None = None
    node_exporter_metrics: NodeExporterMetrics | None = None
    prometheus_scrape_metrics: PrometheusScrapeMetrics | None = None
    fluent_bit_metrics: FluentbitMetrics | None = None
    custom_plugin: CustomPlugin | None = None
    forward: Forward | None = None
    open_telemetry: OpenTelemetry | None = None
    http: HTTP | None = None

    def plugins(self) -> list[Plugin]:
        """The configured plugins, in declaration order."""
        candidates = (
            self.dummy,
            self.tail,
            self.systemd,
            self.node_exporter_metrics,
            self.prometheus_scrape_metrics,
            self.fluent_bit_metrics,
            self.custom_plugin,
            self.forward,
            self.open_telemetry,
            self.http,
        )
        return [plugin for plugin in candidates if plugin is not None]


@dataclass
class ClusterInput:
    """A cluster-level input configuration."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: InputSpec = field(default_factory=InputSpec)


@dataclass
class ClusterInputList:
    """A list of cluster inputs."""

    items: list[ClusterInput] = field(default_factory=list)

    def load(self, secret_loader: SecretLoader) -> str:
        """Render all inputs, ordered by name, as [Input] sections."""
        out: list[str] = []
        for item in sorted(self.items, key=lambda i: i.metadata.name):
            for plugin in item.spec.plugins():
                out.append("[Input]\n")
                name = plugin.name()
                if name:
                    out.append(f"    Name    {name}\n")
                if item.spec.alias:
                    out.append(f"    Alias    {item.spec.alias}\n")
                if item.spec.log_level:
                    out.append(f"    Log_Level    {item.spec.log_level}\n")
                out.append(str(plugin.params(secret_loader)))
        return "".join(out)