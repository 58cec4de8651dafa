"""Tests for the engine invocation tracer (hangar_engines/tracer.py)."""

import json
import logging
from io import StringIO

from builders import make_log
from hangar_engines.deliveries import extract_deliveries
from hangar_engines.tracer import compute_input_fingerprint, traced_engine
from hangar_kernel.logging_config import StructuredFormatter, configure_logging


def _capture() -> StringIO:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(handler=handler, level=logging.DEBUG)
    return stream


def _traces(stream: StringIO) -> list[dict]:
    records = [json.loads(line) for line in stream.getvalue().splitlines() if line]
    return [r for r in records if r["message"] == "HANGAR_ENGINE_TRACE"]


class TestComputeInputFingerprint:

    def test_deterministic(self):
        args = {"subdivision": 2, "required_type_ids": frozenset({35, 34})}
        fields = ("subdivision", "required_type_ids")
        assert compute_input_fingerprint(fields, args) == compute_input_fingerprint(fields, args)

    def test_set_order_irrelevant(self):
        fields = ("ids",)
        assert compute_input_fingerprint(fields, {"ids": {1, 2, 3}}) == compute_input_fingerprint(
            fields, {"ids": {3, 1, 2}}
        )

    def test_different_inputs_differ(self):
        fields = ("subdivision",)
        assert compute_input_fingerprint(fields, {"subdivision": 1}) != compute_input_fingerprint(
            fields, {"subdivision": 2}
        )

    def test_length(self):
        assert len(compute_input_fingerprint(("x",), {})) == 16


class TestTracedEngine:

    def test_emits_trace_record(self):
        stream = _capture()
        extract_deliveries([make_log()], 2, {34})

        (trace,) = _traces(stream)
        assert trace["trace_type"] == "HANGAR_ENGINE_TRACE"
        assert trace["engine_name"] == "delivery_extractor"
        assert trace["engine_version"] == "1.0"
        assert trace["result_size"] == 1
        assert len(trace["input_fingerprint"]) == 16
        assert trace["function"] == "extract_deliveries"

    def test_positional_and_keyword_calls_share_fingerprint(self):
        stream = _capture()
        extract_deliveries([], 2, {34})
        extract_deliveries([], subdivision=2, required_type_ids={34})

        first, second = _traces(stream)
        assert first["input_fingerprint"] == second["input_fingerprint"]

    def test_result_passed_through(self):
        @traced_engine("echo", "0.1", fingerprint_fields=("value",))
        def echo(value):
            return value

        result = {"k": 1}
        assert echo(result) is result

    def test_exceptions_propagate_without_trace(self):
        stream = _capture()

        @traced_engine("boom", "0.1")
        def boom():
            raise KeyError("x")

        try:
            boom()
        except KeyError:
            pass
        assert _traces(stream) == []
