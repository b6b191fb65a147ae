# fluentbitcfg

`fluentbitcfg` describes a Fluent Bit logging pipeline as plain Python
objects and renders it into the text of Fluent Bit's classic configuration
format: the `[Service]`, `[Input]`, `[Filter]`, `[Output]` and `[PARSER]`
sections.

It is a library; it installs no commands.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run its tests:

```
pip install ".[test]"
pytest
```

## What is in it

- `fluentbitcfg.base` – the building blocks:
  - `KVs`, an ordered list of key/value pairs plus optional raw content,
    rendered by `str()` as indented section lines;
  - `Plugin`, the abstract interface every plugin implements: `name()` and
    `params(secret_loader)`, which returns a `KVs`;
  - `SecretLoader`, which carries a client object and a namespace and is
    handed to every plugin's `params()`; `with_namespace()` returns a copy
    for another namespace;
  - `CommonParams`, the alias and retry limit shared by the filter plugins;
  - `ObjectMeta`, the name, namespace and labels of a resource;
  - `ConfigMapLoader` and `ConfigMapKeySelector` for reading a value out of a
    config map through a client that has a
    `get_config_map(name, namespace)` method; a missing key raises
    `NotFoundError`, and one trailing newline is removed from the value;
  - `render_value()`, which writes booleans as `true`/`false` and everything
    else with `str()`.
- `fluentbitcfg.custom` – `CustomPlugin`, which passes a hand-written block of
  settings through with each non-empty line trimmed and indented, and the
  helpers `namespaced_match()`, `namespaced_match_regex()` and
  `make_custom_config_namespaced()`, which scope `Match` and `Match_Regex`
  expressions to a namespace by prefixing the MD5 hash of its name.
- Filter plugins: `filters_kube` (`Kubernetes`, `AWS`, `Grep`),
  `filters_records` (`Modify` with its `Condition` and `Rule`,
  `RecordModifier`, `RewriteTag`, `Nest`) and `filters_parsing` (`Lua`,
  `Multiline` with `Multi`, `Parser`, `Throttle`).
- Input plugins: `inputs_files` (`Tail`, `Systemd`, `Dummy`),
  `inputs_metrics` (`NodeExporterMetrics` with `MetricsPath`,
  `FluentbitMetrics`, `PrometheusScrapeMetrics`) and `inputs_net`
  (`Forward`, `HTTP`, `OpenTelemetry`).
- Section builders:
  - `input_sections`: `InputSpec`, `ClusterInput`, `ClusterInputList`;
  - `filter_sections`: `FilterItem`, `FilterSpec`, `ClusterFilter`,
    `ClusterFilterList`, `Filter`, `FilterList`;
  - `output_sections`: `OutputSpec`, `ClusterOutput`, `ClusterOutputList`,
    `Output`, `OutputList`;
  - `parser_sections`: `Decoder`, `ParserSpec`, `ClusterParser`,
    `ClusterParserList`, `Parser`, `ParserList`.

  Each list's `load()` renders its items sorted by name. The namespaced
  lists (`FilterList`, `OutputList`, `ParserList`) scope match expressions,
  parser names, the Kubernetes filter's tag prefix and regex parser, and the
  `Match` lines of custom plugins to the item's namespace; the objects given
  to them are left unchanged.
- `fluentbitcfg.config` – `Service` and `Storage` for the `[Service]`
  section, and `ClusterFluentBitConfig`, which puts everything together with
  `render_main_config()`, `render_parser_config()` and
  `render_lua_scripts()`. `FluentBitConfig` and `NamespacedFluentBitCfgSpec`
  describe a namespaced configuration.

## Key/value rendering

Every plugin turns its settings into a `KVs`. Keys keep the order in which
they were inserted, and a key may appear more than once:

```python
from fluentbitcfg.base import KVs

kvs = KVs()
kvs.insert("Rate", "200")
kvs.insert("Window", "300")
print(str(kvs), end="")
```

prints

```
    Rate    200
    Window    300
```

Settings that come from a mapping, such as the conditions and rules of
`Modify`, are written in sorted key order, so the same objects always render
to the same text. Unset settings (`None` or an empty string) are left out.

## Rendering a pipeline

```python
from fluentbitcfg.base import ObjectMeta, SecretLoader
from fluentbitcfg.config import ClusterFluentBitConfig, FluentBitConfigSpec, Service
from fluentbitcfg.filter_sections import ClusterFilterList
from fluentbitcfg.input_sections import ClusterInput, ClusterInputList, InputSpec
from fluentbitcfg.inputs_files import Tail
from fluentbitcfg.output_sections import ClusterOutputList

cfg = ClusterFluentBitConfig(
    spec=FluentBitConfigSpec(service=Service(flush_seconds=1, log_level="info"))
)
inputs = ClusterInputList([
    ClusterInput(
        metadata=ObjectMeta(name="tail"),
        spec=InputSpec(tail=Tail(path="/var/log/containers/*.log", tag="kube.*")),
    )
])
text = cfg.render_main_config(
    SecretLoader(), inputs, ClusterFilterList(), ClusterOutputList(), None, None, None
)
print(text)
```

prints

```
[Service]
    Flush    1
    Log_Level    info
[Input]
    Name    tail
    Path    /var/log/containers/*.log
    Tag    kube.*
[Output]
    Name    null
    Match   *
```

When there are inputs but no outputs at all, a `null` output matching `*` is
added so the rendered configuration stays valid. The main configuration is
written in this order: service, cluster inputs, cluster filters, the
rewrite-tag configurations passed in, namespaced filters, namespaced outputs,
cluster outputs.

Parser files are rendered separately with `render_parser_config()`. A
cluster parser name that has already been written is not written again;
namespaced parsers get the namespace hash appended to their names.
`render_lua_scripts()` loads the script of every `Lua` filter through a
`ConfigMapLoader` and returns `Script` objects sorted by name.

## What the package does not do

- It ships no output plugin classes and no parser format classes. The
  plugin fields of `OutputSpec` and the `json`, `regex`, `ltsv` and `logfmt`
  fields of `ParserSpec` accept any object implementing `Plugin`; a
  `CustomPlugin` can be used for a block of raw settings. Likewise the
  `tls` field of the `HTTP` input accepts any object with a `params()`
  method.
- It does not talk to a Kubernetes cluster. `SecretLoader` only carries the
  client it is given, and `ConfigMapLoader` calls whatever client object it
  is given.
- It does not select resources by label. The selector fields of the
  configuration specs are stored as plain label mappings; choosing which
  inputs, filters, outputs and parsers to render is left to the caller.
- It does not write files or run Fluent Bit; it returns configuration text.