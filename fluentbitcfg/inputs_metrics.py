"""Inputs that collect host metrics, Fluent Bit metrics or scrape Prometheus."""

from __future__ import annotations

from dataclasses import dataclass

from .base import KVs, Plugin, SecretLoader, render_value


@dataclass
class MetricsPath:
    """Filesystem locations used to collect host metrics."""

    procfs: str = ""
    sysfs: str = ""


@dataclass
class NodeExporterMetrics(Plugin):
    """Collects system and host level metrics."""

    tag: str = ""
    scrape_interval: str = ""
    path: MetricsPath | None = None

    def name(self) -> str:
        return "node_exporter_metrics"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        if self.tag:
            kvs.insert("Tag", self.tag)
        if self.scrape_interval:
            kvs.insert("scrape_interval", self.scrape_interval)
        if self.path is not None:
            if self.path.procfs:
                kvs.insert("path.procfs", self.path.procfs)
            if self.path.sysfs:
                kvs.insert("path.sysfs", self.path.sysfs)
        return kvs


@dataclass
class FluentbitMetrics(Plugin):
    """Exposes Fluent Bit's own internal metrics."""

    tag: str = ""
    scrape_interval: str = ""
    scrape_on_start: bool | None = None

    def name(self) -> str:
        return "fluentbit_metrics"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        if self.tag:
            kvs.insert("Tag", self.tag)
        if self.scrape_interval:
            kvs.insert("scrape_interval", self.scrape_interval)
        if self.scrape_on_start is not None:
            kvs.insert("scrape_on_start", render_value(self.scrape_on_start))
        return kvs


@dataclass
class PrometheusScrapeMetrics(Plugin):
    """Scrapes metrics from a Prometheus endpoint at a set interval."""

    tag: str = ""
    host: str = ""
    port: int | None = None
    scrape_interval: str = ""
    metrics_path: str = ""

    def name(self) -> str:
        return "prometheus_scrape"

    def params(self, secret_loader: SecretLoader) -> KVs:
        kvs = KVs()
        if self.tag:
            kvs.insert("tag", self.tag)
        if self.host.lower() in ("", "host"):
            kvs.insert("host", "${HOST_IP}")
        else:
            kvs.insert("host", self.host)
        if self.port is not None:
            kvs.insert("port", render_value(self.port))
        if self.scrape_interval:
            kvs.insert("scrape_interval", self.scrape_interval)
        if self.metrics_path:
            kvs.insert("metrics_path", self.metrics_path)
        return kvs