from dataclasses import dataclass, field

import pytest

from fluentbitcfg.base import KVs, SecretLoader
from fluentbitcfg.inputs_net import HTTP, Forward, OpenTelemetry

SL = SecretLoader(None, "testnamespace")


@dataclass
class _FakeTLS:
    pairs: list = field(default_factory=list)
    fail: bool = False

    def params(self, secret_loader):
        if self.fail:
            raise ValueError("secret missing")
        return KVs(pairs=list(self.pairs))


def test_names():
    assert Forward().name() == "forward"
    assert HTTP().name() == "http"
    assert OpenTelemetry().name() == "opentelemetry"


def test_forward_params_order():
    fwd = Forward(
        port=433,
        listen="0.0.0.0",
        buffer_chunk_size="1M",
        buffer_max_size="6M",
        threaded="on",
    )
    assert list(fwd.params(SL)) == [
        ("Port", "433"),
        ("Listen", "0.0.0.0"),
        ("Buffer_Chunk_Size", "1M"),
        ("Buffer_Max_Size", "6M"),
        ("threaded", "on"),
    ]


def test_forward_empty_has_no_params():
    assert len(Forward().params(SL)) == 0


def test_http_params_and_tls_merge():
    http = HTTP(
        listen="0.0.0.0",
        port=9880,
        tag_key="tag",
        successful_response_code=201,
        successful_header="X-Custom custom-answer",
        tls=_FakeTLS(pairs=[("tls", "On")]),
    )
    assert list(http.params(SL)) == [
        ("listen", "0.0.0.0"),
        ("port", "9880"),
        ("tag_key", "tag"),
        ("successful_response_code", "201"),
        ("success_header", "X-Custom custom-answer"),
        ("tls", "On"),
    ]


def test_http_tls_error_propagates():
    with pytest.raises(ValueError):
        HTTP(tls=_FakeTLS(fail=True)).params(SL)


def test_opentelemetry_bool_rendering():
    otel = OpenTelemetry(port=4318, raw_traces=False, buffer_max_size="4M")
    assert list(otel.params(SL)) == [
        ("port", "4318"),
        ("raw_traces", "false"),
        ("buffer_max_size", "4M"),
    ]