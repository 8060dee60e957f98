"""Tests for stage timing on service calls."""

from __future__ import annotations

import pytest

from custreg.services.registry import RegistryService
from custreg.services.telemetry import Span, enable_telemetry, trace_span, traced
from tests.conftest import make_person


class TestSpan:
    def test_to_dict(self) -> None:
        root = Span(name="root")
        child = Span(name="load")
        root.children.append(child)
        child.annotate(id=1)
        child.finish()
        root.finish()
        d = root.to_dict()
        assert d["name"] == "root"
        assert d["status"] == "ok"
        assert d["stages"][0]["attrs"] == {"id": 1}
        assert d["duration_ms"] >= 0

    def test_unfinished(self) -> None:
        span = Span(name="x")
        assert span.duration_ms == 0.0
        assert span.status == "open"


class TestDisabled:
    def test_no_meta(self, service: RegistryService) -> None:
        assert service.get(1).meta is None

    def test_trace_span_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None


class TestEnabled:
    def test_meta_has_stage_tree(self, service: RegistryService) -> None:
        enable_telemetry()
        result = service.set_state(1, 2)
        tree = result.meta["telemetry"]  # type: ignore[index]
        assert tree["name"] == "RegistryService.set_state"
        assert tree["status"] == "ok"
        assert [s["name"] for s in tree["stages"]] == ["validate", "load", "store"]
        assert tree["stages"][1]["attrs"] == {"id": 1}

    def test_failed_result_carries_code(self, empty_service: RegistryService) -> None:
        enable_telemetry()
        result = empty_service.new(make_person(ssn=""))
        tree = result.meta["telemetry"]  # type: ignore[index]
        assert tree["status"] == "failed"
        assert tree["attrs"]["code"] == "VALIDATION_FAILED"
        assert [s["name"] for s in tree["stages"]] == ["validate"]

    def test_invalid_input_skips_load(self, service: RegistryService) -> None:
        enable_telemetry()
        tree = service.add_tax_info(99, None).meta["telemetry"]  # type: ignore[index]
        assert [s["name"] for s in tree["stages"]] == ["validate"]

    def test_non_result_passthrough(self) -> None:
        enable_telemetry()

        @traced
        def plain() -> int:
            with trace_span("inner") as span:
                assert span is not None
            return 3

        assert plain() == 3

    def test_raised_stage_marked(self) -> None:
        enable_telemetry()
        seen: list[Span] = []

        @traced
        def boom() -> None:
            with trace_span("store") as span:
                assert span is not None
                seen.append(span)
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            boom()
        assert seen[0].status == "raised"
        assert seen[0].ended_ns is not None

    def test_trace_span_outside_traced_call(self) -> None:
        enable_telemetry()
        with trace_span("orphan") as span:
            assert span is None
