from dataclasses import dataclass, field

import pytest

from fluentbitcfg.base import KVs, ObjectMeta, Plugin, SecretLoader
from fluentbitcfg.parser_sections import (
    ClusterParser,
    ClusterParserList,
    Decoder,
    Parser,
    ParserList,
    ParserSpec,
)

SL = SecretLoader(None, "testnamespace")
FOO_HASH = "acbd18db4cc2f85cedef654fccc4a4d8"


@dataclass
class _Format(Plugin):
    format_name: str
    pairs: list = field(default_factory=list)
    fail: bool = False

    def name(self):
        return self.format_name

    def params(self, secret_loader):
        if self.fail:
            raise ValueError("bad parser")
        return KVs(pairs=list(self.pairs))


def _cluster_parser(name, **spec):
    return ClusterParser(metadata=ObjectMeta(name=name), spec=ParserSpec(**spec))


def test_cluster_parser_section_layout():
    item = _cluster_parser(
        "json-parser",
        json=_Format("json", [("Time_Key", "time")]),
        decoders=[Decoder(decode_field="json log"), Decoder(decode_field_as="escaped log")],
    )
    rendered = ClusterParserList(items=[item]).load(SL, set())
    assert rendered == (
        "[PARSER]\n"
        "    Name    json-parser\n"
        "    Format    json\n"
        "    Time_Key    time\n"
        "    Decode_Field    json log\n"
        "    Decode_Field_As    escaped log\n"
    )


def test_existing_parsers_are_skipped_and_recorded():
    existing = {"a"}
    parsers = ClusterParserList(items=[
        _cluster_parser("b", regex=_Format("regex")),
        _cluster_parser("a", json=_Format("json")),
    ])
    rendered = parsers.load(SL, existing)
    assert "Name    a\n" not in rendered
    assert "Name    b\n" in rendered
    assert existing == {"a", "b"}
    assert parsers.load(SL, existing) == ""


def test_parsers_without_format_are_not_recorded():
    existing: set = set()
    assert ClusterParserList(items=[_cluster_parser("empty")]).load(SL, existing) == ""
    assert existing == set()


def test_sorted_by_name_and_formats_in_order():
    parsers = ClusterParserList(items=[
        _cluster_parser("z", logfmt=_Format("logfmt"), json=_Format("json")),
        _cluster_parser("m", ltsv=_Format("ltsv")),
    ])
    rendered = parsers.load(SL, set())
    formats = [line.split()[-1] for line in rendered.splitlines() if "Format" in line]
    assert formats == ["ltsv", "json", "logfmt"]


def test_namespaced_parser_name_is_hashed():
    item = Parser(
        metadata=ObjectMeta(name="bar", namespace="foo"),
        spec=ParserSpec(json=_Format("json")),
    )
    rendered = ParserList(items=[item]).load(SL)
    assert rendered.splitlines()[1] == f"    Name    bar-{FOO_HASH}"


def test_plugin_error_propagates():
    with pytest.raises(ValueError):
        ClusterParserList(items=[_cluster_parser("x", json=_Format("json", fail=True))]).load(SL, set())
    with pytest.raises(ValueError):
        ParserList(items=[Parser(spec=ParserSpec(regex=_Format("regex", fail=True)))]).load(SL)