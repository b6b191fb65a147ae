from fluentbitcfg.base import SecretLoader
from fluentbitcfg.custom import (
    CustomPlugin,
    make_custom_config_namespaced,
    namespaced_match,
    namespaced_match_regex,
)

FOO_HASH = "acbd18db4cc2f85cedef654fccc4a4d8"

KAFKA_CONFIG = (
    "    Name    kafka\n    Topics    fluentbit\n    Match    *\n"
    "    Brokers    192.168.100.32:9092\n    rdkafka.debug    All\n"
    "    rdkafka.request.required.acks    1\n    rdkafka.log.connection.close    false\n"
    "    rdkafka.log_level    7\n    rdkafka.metadata.broker.list    192.168.100.32:9092"
)

KAFKA_EXPECTED = """    Name    kafka
    Topics    fluentbit
    Match    *
    Brokers    192.168.100.32:9092
    rdkafka.debug    All
    rdkafka.request.required.acks    1
    rdkafka.log.connection.close    false
    rdkafka.log_level    7
    rdkafka.metadata.broker.list    192.168.100.32:9092
"""


def test_custom_plugin_has_empty_name():
    assert CustomPlugin(config="x").name() == ""


def test_custom_plugin_indents_config():
    kvs = CustomPlugin(config=KAFKA_CONFIG).params(SecretLoader(None, "testnamespace"))
    assert str(kvs) == KAFKA_EXPECTED
    assert len(kvs) == 0


def test_custom_plugin_skips_empty_lines():
    kvs = CustomPlugin(config="\nName kafka\n\n").params(SecretLoader())
    assert str(kvs) == "    Name kafka\n"


def test_namespaced_match():
    assert namespaced_match("foo", "kube.*") == f"{FOO_HASH}.kube.*"


def test_namespaced_match_regex_anchors_and_strips_caret():
    assert namespaced_match_regex("foo", "^kube") == f"^{FOO_HASH}\\.kube"
    assert namespaced_match_regex("foo", "kube") == namespaced_match_regex("foo", "^kube")


def test_make_custom_config_namespaced_rewrites_match():
    result = make_custom_config_namespaced("Name    kafka\n    Match    kube.*", "foo")
    assert result == f"Name    kafka\nMatch {FOO_HASH}.kube.*\n"


def test_make_custom_config_namespaced_rewrites_match_regex():
    result = make_custom_config_namespaced("Match_Regex  ^app", "foo")
    assert result == f"Match_Regex {namespaced_match_regex('foo', '^app')}\n"


def test_make_custom_config_namespaced_keeps_other_lines():
    result = make_custom_config_namespaced("Name kafka\nTopics fluentbit", "foo")
    assert result == "Name kafka\nTopics fluentbit\n"