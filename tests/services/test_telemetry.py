"""Build timing spans: Span, trace_span and the @traced decorator."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from blogctl.infrastructure.site import SiteGraph
from blogctl.services.build import BuildService
from blogctl.services.result import ServiceResult
from blogctl.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)


@pytest.fixture
def root_span() -> Generator[Span]:
    """Telemetry on, with a root span installed as the current one."""
    enable_telemetry()
    root = Span(name="root")
    token = _current_span.set(root)
    yield root
    _current_span.reset(token)
    disable_telemetry()


@traced
def _publish(pages: int) -> ServiceResult:
    with trace_span("write") as span:
        if span:
            span.annotate("pages", pages)
    return ServiceResult(ok=True, op="publish", data={"pages": pages}, meta={"run": 1})


class TestSpan:
    def test_open_span_has_no_duration(self) -> None:
        assert Span(name="render").duration_ms == 0.0

    def test_end_records_time(self) -> None:
        span = Span(name="render")
        span.end()
        assert span.end_time is not None
        assert span.duration_ms >= 0.0

    def test_to_dict_omits_empty_parts(self) -> None:
        span = Span(name="assets")
        span.end()
        assert set(span.to_dict()) == {"name", "duration_ms"}

    def test_to_dict_nests_children(self) -> None:
        parent = Span(name="build")
        child = Span(name="render", parent=parent)
        parent.children.append(child)
        child.annotate("pages", 4)
        data = parent.to_dict()
        assert data["children"][0]["name"] == "render"
        assert data["children"][0]["annotations"] == {"pages": 4}


class TestTraceSpan:
    def test_yields_none_while_disabled(self) -> None:
        with trace_span("source") as span:
            assert span is None

    def test_yields_none_outside_traced_call(self) -> None:
        enable_telemetry()
        try:
            with trace_span("source") as span:
                assert span is None
        finally:
            disable_telemetry()

    def test_children_attach_to_current_span(self, root_span: Span) -> None:
        with trace_span("render"):
            with trace_span("page") as page:
                assert _current_span.get() is page
        assert _current_span.get() is root_span
        render = root_span.children[0]
        assert render.name == "render"
        assert render.end_time is not None
        assert [c.name for c in render.children] == ["page"]


class TestTraced:
    def test_disabled_leaves_meta_alone(self) -> None:
        assert _publish(2).meta == {"run": 1}

    def test_enabled_adds_span_tree(self) -> None:
        enable_telemetry()
        try:
            result = _publish(2)
        finally:
            disable_telemetry()
        assert result.meta is not None
        assert result.meta["run"] == 1
        tree = result.meta["telemetry"]
        assert tree["name"] == "_publish"
        assert tree["children"][0] == {
            "name": "write",
            "duration_ms": tree["children"][0]["duration_ms"],
            "annotations": {"pages": 2},
        }

    def test_other_return_values_pass_through(self) -> None:
        @traced
        def count() -> int:
            return 3

        enable_telemetry()
        try:
            assert count() == 3
        finally:
            disable_telemetry()

    def test_exception_restores_current_span(self) -> None:
        @traced
        def explode() -> ServiceResult:
            raise RuntimeError("template missing")

        enable_telemetry()
        try:
            with pytest.raises(RuntimeError, match="template missing"):
                explode()
        finally:
            disable_telemetry()
        assert _current_span.get() is None


class TestBuildTelemetry:
    def test_build_span_tree(self, site: SiteGraph) -> None:
        enable_telemetry()
        try:
            result = BuildService(site).build()
        finally:
            disable_telemetry()
        assert result.ok
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "BuildService.build"
        children = {c["name"]: c for c in tree["children"]}
        assert {"source", "assets", "render"} <= set(children)
        assert children["source"]["annotations"] == {"documents": 2, "files": 3}
        assert children["render"]["annotations"] == {"pages": 4}
