"""Filter resources and their rendering as [Filter] sections."""

from __future__ import annotations

import dataclasses
import hashlib
from dataclasses import dataclass, field

from .base import ObjectMeta, Plugin, SecretLoader
from .custom import (
    CustomPlugin,
    make_custom_config_namespaced,
    namespaced_match,
    namespaced_match_regex,
)
from .filters_kube import AWS, Grep, Kubernetes
from .filters_parsing import Lua, Multiline, Throttle
from .filters_parsing import Parser as ParserFilter
from .filters_records import Modify, Nest, RecordModifier, RewriteTag

_DEFAULT_KUBE_TAG_PREFIX = "kube.var.log.containers."


@dataclass
class FilterItem:
    """One entry of a filter pipeline; any number of its plugins may be set."""

    grep: Grep | None = None
    record_modifier: RecordModifier | None = None
    kubernetes: Kubernetes | None = None
    modify: Modify | None = None
    nest: Nest | None = None
    parser: ParserFilter | None = None
    lua: Lua | None = None
    throttle: Throttle | None = None
    rewrite_tag: RewriteTag | None = None
    aws: AWS | None = None
    multiline: Multiline | None = None
    custom_plugin: CustomPlugin | None = None

    def plugins(self) -> list[Plugin]:
        """The configured plugins, in declaration order."""
        candidates = (
            self.grep,
            self.record_modifier,
            self.kubernetes,
            self.modify,
            self.nest,
            self.parser,
            self.lua,
            self.throttle,
            self.rewrite_tag,
            self.aws,
            self.multiline,
            self.custom_plugin,
        )
        return [plugin for plugin in candidates if plugin is not None]


@dataclass
class FilterSpec:
    """Desired state of a filter: tag matching plus an ordered list of plugins."""

    match: str = ""
    match_regex: str = ""
    log_level: str = ""
    filter_items: list[FilterItem] = field(default_factory=list)


@dataclass
class ClusterFilter:
    """A cluster-level filter configuration."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: FilterSpec = field(default_factory=FilterSpec)


@dataclass
class ClusterFilterList:
    """A list of cluster filters."""

    items: list[ClusterFilter] = field(default_factory=list)

    def load(self, secret_loader: SecretLoader) -> str:
        """Render all filters, ordered by name, as [Filter] sections."""
        out: list[str] = []
        for item in sorted(self.items, key=lambda i: i.metadata.name):
            spec = item.spec
            for filter_item in spec.filter_items:
                for plugin in filter_item.plugins():
                    out.append("[Filter]\n")
                    name = plugin.name()
                    if name:
                        out.append(f"    Name    {name}\n")
                    if spec.log_level:
                        out.append(f"    Log_Level    {spec.log_level}\n")
                    if spec.match:
                        out.append(f"    Match    {spec.match}\n")
                    if spec.match_regex:
                        out.append(f"    Match_Regex    {spec.match_regex}\n")
                    out.append(str(plugin.params(secret_loader)))
        return "".join(out)


@dataclass
class Filter:
    """A namespaced filter configuration."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: FilterSpec = field(default_factory=FilterSpec)


def _namespaced(plugin: Plugin, namespace: str) -> Plugin:
    """Return a copy of ``plugin`` whose tag and parser references are namespaced."""
    digest = hashlib.md5(namespace.encode()).hexdigest()
    if isinstance(plugin, Kubernetes):
        prefix = plugin.kube_tag_prefix or _DEFAULT_KUBE_TAG_PREFIX
        regex_parser = f"{plugin.regex_parser}-{digest}" if plugin.regex_parser else ""
        return dataclasses.replace(
            plugin, kube_tag_prefix=f"{digest}.{prefix}", regex_parser=regex_parser
        )
    if isinstance(plugin, ParserFilter):
        names = ",".join(f"{name.strip(' ')}-{digest}" for name in plugin.parser.split(","))
        return dataclasses.replace(plugin, parser=names)
    if isinstance(plugin, CustomPlugin) and plugin.config:
        return dataclasses.replace(
            plugin, config=make_custom_config_namespaced(plugin.config, namespace)
        )
    return plugin


@dataclass
class FilterList:
    """A list of namespaced filters."""

    items: list[Filter] = field(default_factory=list)

    def load(self, secret_loader: SecretLoader) -> str:
        """Render filters with matches and parser names scoped to their namespace."""
        out: list[str] = []
        for item in sorted(self.items, key=lambda i: i.metadata.name):
            spec = item.spec
            namespace = item.metadata.namespace
            for filter_item in spec.filter_items:
                for plugin in filter_item.plugins():
                    out.append("[Filter]\n")
                    name = plugin.name()
                    if name:
                        out.append(f"    Name    {name}\n")
                    if spec.match:
                        out.append(f"    Match    {namespaced_match(namespace, spec.match)}\n")
                    if spec.match_regex:
                        regex = namespaced_match_regex(namespace, spec.match_regex)
                        out.append(f"    Match_Regex    {regex}\n")
                    namespaced = _namespaced(plugin, namespace)
                    out.append(str(namespaced.params(secret_loader)))
        return "".join(out)