"""Free-form plugin configuration and namespacing of match expressions."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from .base import KVs, Plugin, SecretLoader


def _namespace_hash(namespace: str) -> str:
    return hashlib.md5(namespace.encode()).hexdigest()


def namespaced_match(namespace: str, match: str) -> str:
    """Prefix a tag match pattern with the hash of a namespace."""
    return f"{_namespace_hash(namespace)}.{match}"


def namespaced_match_regex(namespace: str, regex: str) -> str:
    """Anchor a tag match regex to the hash prefix of a namespace."""
    regex = regex.removeprefix("^")
    return f"^{_namespace_hash(namespace)}\\.{regex}"


def _indent(text: str) -> str:
    return "".join(f"    {line.strip()}\n" for line in text.split("\n") if line)


def make_custom_config_namespaced(config: str, namespace: str) -> str:
    """Rewrite Match and Match_Regex lines of a raw config for a namespace."""
    out = []
    for line in config.split("\n"):
        line = line.strip()
        last_word = line[line.rfind(" ") + 1:]
        if line.startswith("Match_Regex"):
            out.append(f"Match_Regex {namespaced_match_regex(namespace, last_word)}\n")
        elif line.startswith("Match"):
            out.append(f"Match {namespaced_match(namespace, last_word)}\n")
        else:
            out.append(f"{line}\n")
    return "".join(out)


@dataclass
class CustomPlugin(Plugin):
    """A plugin given as raw configuration text."""

    config: str = ""

    def name(self) -> str:
        return ""

    def params(self, secret_loader: SecretLoader) -> KVs:
        return KVs(content=_indent(self.config))