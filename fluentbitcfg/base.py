"""Core building blocks: parameter lists, the plugin contract and resource loaders."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Protocol


def render_value(value: Any) -> str:
    """Render a parameter value the way the configuration file expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class KVs:
    """An ordered list of configuration key/value pairs with optional raw content."""

    pairs: list[tuple[str, str]] = field(default_factory=list)
    content: str = ""

    def insert(self, key: str, value: str) -> None:
        """Append a key/value pair; duplicate keys are kept."""
        self.pairs.append((key, value))

    def insert_string_map(
        self,
        mapping: Mapping[str, str] | None,
        render: Callable[[str, str], tuple[str, str]],
    ) -> None:
        """Insert every entry of ``mapping`` in key order, rendered by ``render``."""
        if not mapping:
            return
        for key in sorted(mapping):
            self.insert(*render(key, mapping[key]))

    def merge(self, other: KVs) -> None:
        """Append all pairs and content of ``other``."""
        self.pairs.extend(other.pairs)
        self.content += other.content

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __str__(self) -> str:
        lines = "".join(f"    {key}    {value}\n" for key, value in self.pairs)
        return lines + self.content


@dataclass(frozen=True)
class SecretLoader:
    """Access to secrets of one namespace through a cluster client."""

    client: Any = None
    namespace: str = ""

    def with_namespace(self, namespace: str) -> SecretLoader:
        """Return a loader using the same client for another namespace."""
        return dataclasses.replace(self, namespace=namespace)


class Plugin(ABC):
    """A plugin that renders itself as a section of key/value parameters."""

    @abstractmethod
    def name(self) -> str:
        """The plugin name written into the section."""

    @abstractmethod
    def params(self, secret_loader: SecretLoader) -> KVs:
        """The parameters of the section."""


@dataclass
class ObjectMeta:
    """Identifying metadata of a resource."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class CommonParams:
    """Parameters shared by many plugins."""

    alias: str = ""
    retry_limit: str = ""

    def add_common_params(self, kvs: KVs) -> None:
        """Insert the common parameters that are set."""
        if self.alias:
            kvs.insert("Alias", self.alias)
        if self.retry_limit:
            kvs.insert("Retry_Limit", self.retry_limit)


@dataclass(frozen=True)
class ConfigMapKeySelector:
    """Selects one key of a config map."""

    name: str = ""
    key: str = ""
    optional: bool | None = None


class NotFoundError(LookupError):
    """Raised when a requested key is absent."""


class ConfigMapClient(Protocol):
    """The part of a cluster client needed to read config maps."""

    def get_config_map(self, name: str, namespace: str) -> Mapping[str, str]:
        """Return the data of the named config map."""
        ...


@dataclass
class ConfigMapLoader:
    """Reads values out of config maps."""

    client: ConfigMapClient
    namespace: str = ""

    def load_config_map(self, selector: ConfigMapKeySelector, namespace: str) -> str:
        """Return the selected value with one trailing newline removed."""
        data = self.client.get_config_map(selector.name, namespace)
        try:
            value = data[selector.key]
        except KeyError:
            raise NotFoundError(f"The key {selector.key} is not found.") from None
        return value[:-1] if value.endswith("\n") else value