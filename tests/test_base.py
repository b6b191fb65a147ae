import pytest

from fluentbitcfg.base import (
    CommonParams,
    ConfigMapKeySelector,
    ConfigMapLoader,
    KVs,
    NotFoundError,
    ObjectMeta,
    Plugin,
    SecretLoader,
    render_value,
)


class FakeClient:
    def __init__(self, maps):
        self.maps = maps
        self.calls = []

    def get_config_map(self, name, namespace):
        self.calls.append((name, namespace))
        try:
            return self.maps[(name, namespace)]
        except KeyError:
            raise LookupError(f"config map {name} missing") from None


def test_render_value_booleans_and_numbers():
    assert render_value(True) == "true"
    assert render_value(False) == "false"
    assert render_value(30) == "30"
    assert render_value("5MB") == "5MB"


def test_kvs_string_format():
    kvs = KVs()
    kvs.insert("Rate", "200")
    kvs.insert("Window", "300")
    assert str(kvs) == "    Rate    200\n    Window    300\n"


def test_kvs_keeps_duplicates_in_order():
    kvs = KVs()
    kvs.insert("Parser", "a")
    kvs.insert("Parser", "b")
    assert list(kvs) == [("Parser", "a"), ("Parser", "b")]
    assert len(kvs) == 2


def test_insert_string_map_sorts_keys():
    kvs = KVs()
    kvs.insert_string_map(
        {"kve1": "kvev1", "kve0": "kvev0", "kve2": "kvev2"},
        lambda k, v: ("Condition", f"Key_value_equals    {k}    {v}"),
    )
    assert [v for _, v in kvs] == [
        "Key_value_equals    kve0    kvev0",
        "Key_value_equals    kve1    kvev1",
        "Key_value_equals    kve2    kvev2",
    ]


def test_insert_string_map_ignores_none():
    kvs = KVs()
    kvs.insert_string_map(None, lambda k, v: (k, v))
    assert len(kvs) == 0


def test_merge_appends_pairs_and_content():
    first = KVs()
    first.insert("a", "1")
    second = KVs(content="    raw\n")
    second.insert("b", "2")
    first.merge(second)
    assert list(first) == [("a", "1"), ("b", "2")]
    assert str(first).endswith("    raw\n")


def test_kvs_equality():
    left, right = KVs(), KVs()
    left.insert("x", "y")
    right.insert("x", "y")
    assert left == right
    right.insert("x", "z")
    assert not left == right


def test_content_only_rendering():
    kvs = KVs(content="    Name    kafka\n")
    assert str(kvs) == "    Name    kafka\n"


def test_common_params():
    kvs = KVs()
    CommonParams(alias="throttle.application-xy", retry_limit="no_limits").add_common_params(kvs)
    assert list(kvs) == [("Alias", "throttle.application-xy"), ("Retry_Limit", "no_limits")]


def test_common_params_empty_adds_nothing():
    kvs = KVs()
    CommonParams().add_common_params(kvs)
    assert len(kvs) == 0


def test_secret_loader_with_namespace():
    client = object()
    loader = SecretLoader(client, "testnamespace")
    other = loader.with_namespace("foo")
    assert other.namespace == "foo"
    assert other.client is client
    assert loader.namespace == "testnamespace"


def test_object_meta_defaults():
    meta = ObjectMeta(name="filter0")
    assert meta.namespace == ""
    assert meta.labels == {}


def test_plugin_is_abstract():
    with pytest.raises(TypeError):
        Plugin()


def test_load_config_map_trims_one_newline():
    client = FakeClient({("scripts", "ns"): {"a.lua": "function f() end\n\n"}})
    loader = ConfigMapLoader(client, "ns")
    value = loader.load_config_map(ConfigMapKeySelector(name="scripts", key="a.lua"), "ns")
    assert value == "function f() end\n"
    assert client.calls == [("scripts", "ns")]


def test_load_config_map_missing_key():
    client = FakeClient({("scripts", "ns"): {}})
    loader = ConfigMapLoader(client, "ns")
    with pytest.raises(NotFoundError, match="The key b.lua is not found."):
        loader.load_config_map(ConfigMapKeySelector(name="scripts", key="b.lua"), "ns")


def test_load_config_map_client_error_propagates():
    loader = ConfigMapLoader(FakeClient({}), "ns")
    with pytest.raises(LookupError):
        loader.load_config_map(ConfigMapKeySelector(name="gone", key="k"), "ns")