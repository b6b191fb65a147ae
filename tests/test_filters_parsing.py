import pytest

from fluentbitcfg.base import ConfigMapKeySelector, SecretLoader
from fluentbitcfg.filters_parsing import Lua, Multi, Multiline, Parser, Throttle


@pytest.fixture
def loader():
    return SecretLoader(None, "testnamespace")


def test_names():
    assert Lua().name() == "lua"
    assert Multiline().name() == "multiline"
    assert Parser().name() == "parser"
    assert Throttle().name() == "throttle"


def test_lua_params(loader):
    lua = Lua(
        script=ConfigMapKeySelector(name="scripts", key="filter.lua"),
        call="cb",
        type_int_key=["a", "b"],
        protected_mode=False,
        time_as_table=True,
    )
    assert list(lua.params(loader)) == [
        ("script", "/fluent-bit/config/filter.lua"),
        ("call", "cb"),
        ("type_int_key", "a b"),
        ("protected_mode", "false"),
        ("time_as_table", "true"),
    ]


def test_lua_always_has_script_and_call(loader):
    lua = Lua(script=ConfigMapKeySelector(name="cm", key="s.lua"), call="f")
    keys = [key for key, _ in lua.params(loader)]
    assert keys == ["script", "call"]


def test_multiline_params(loader):
    ml = Multiline(multi=Multi(parser="java,go", key_content="log"))
    assert list(ml.params(loader)) == [
        ("multiline.parser", "java,go"),
        ("multiline.key_content", "log"),
    ]


def test_multiline_without_multi_is_empty(loader):
    assert len(Multiline().params(loader)) == 0


def test_parser_splits_and_trims_names(loader):
    p = Parser(key_name="log", parser="bar, baz ,qux", reserve_data=True)
    assert list(p.params(loader)) == [
        ("Key_Name", "log"),
        ("Parser", "bar"),
        ("Parser", "baz"),
        ("Parser", "qux"),
        ("Reserve_Data", "true"),
    ]


def test_parser_rendered_text(loader):
    p = Parser(key_name="log", parser="bar", reserve_data=True)
    assert str(p.params(loader)) == (
        "    Key_Name    log\n"
        "    Parser    bar\n"
        "    Reserve_Data    true\n"
    )


def test_throttle_params(loader):
    t = Throttle(alias="throttle.application-xy", rate=200, window=300, interval="1s")
    assert str(t.params(loader)) == (
        "    Alias    throttle.application-xy\n"
        "    Rate    200\n"
        "    Window    300\n"
        "    Interval    1s\n"
    )


def test_throttle_print_status_and_retry_limit(loader):
    t = Throttle(retry_limit="no_retries", print_status=True)
    assert list(t.params(loader)) == [
        ("Retry_Limit", "no_retries"),
        ("Print_Status", "true"),
    ]