"""Parser resources and their rendering as [PARSER] sections."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

from .base import ObjectMeta, Plugin, SecretLoader


@dataclass
class Decoder:
    """A decoder applied by a parser definition."""

    decode_field: str = ""
    decode_field_as: str = ""


@dataclass
class ParserSpec:
    """Desired state of a parser: one or more formats plus decoders."""

    json: Plugin | None = None
    regex: Plugin | None = None
    ltsv: Plugin | None = None
    logfmt: Plugin | None = None
    decoders: list[Decoder] = field(default_factory=list)

    def _formats(self) -> list[Plugin]:
        candidates = (self.json, self.regex, self.ltsv, self.logfmt)
        return [plugin for plugin in candidates if plugin is not None]


def _render_parser(name: str, plugin: Plugin, spec: ParserSpec, secret_loader: SecretLoader) -> str:
    out = [
        "[PARSER]\n",
        f"    Name    {name}\n",
        f"    Format    {plugin.name()}\n",
        str(plugin.params(secret_loader)),
    ]
    for decoder in spec.decoders:
        if decoder.decode_field:
            out.append(f"    Decode_Field    {decoder.decode_field}\n")
        if decoder.decode_field_as:
            out.append(f"    Decode_Field_As    {decoder.decode_field_as}\n")
    return "".join(out)


@dataclass
class ClusterParser:
    """A cluster-level parser definition."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ParserSpec = field(default_factory=ParserSpec)


@dataclass
class ClusterParserList:
    """A list of cluster parsers."""

    items: list[ClusterParser] = field(default_factory=list)

    def load(self, secret_loader: SecretLoader, existing_parsers: set[str]) -> str:
        """Render parsers not yet in ``existing_parsers``, recording the ones written."""
        out: list[str] = []
        for item in sorted(self.items, key=lambda i: i.metadata.name):
            name = item.metadata.name
            if name in existing_parsers:
                continue
            for plugin in item.spec._formats():
                out.append(_render_parser(name, plugin, item.spec, secret_loader))
                existing_parsers.add(name)
        return "".join(out)


@dataclass
class Parser:
    """A namespaced parser definition."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ParserSpec = field(default_factory=ParserSpec)


@dataclass
class ParserList:
    """A list of namespaced parsers."""

    items: list[Parser] = field(default_factory=list)

    def load(self, secret_loader: SecretLoader) -> str:
        """Render parsers with names suffixed by the hash of their namespace."""
        out: list[str] = []
        for item in sorted(self.items, key=lambda i: i.metadata.name):
            digest = hashlib.md5(item.metadata.namespace.encode()).hexdigest()
            name = f"{item.metadata.name}-{digest}"
            for plugin in item.spec._formats():
                out.append(_render_parser(name, plugin, item.spec, secret_loader))
        return "".join(out)