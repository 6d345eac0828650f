"""Tests for the tracer module."""

import json

import numpy as np
import pytest


class TestSummarize:
    """Tests for object summarization."""

    def test_numpy_array_summary(self):
        from detoverlap.tracer import summarize

        summary = summarize(np.zeros((100, 200), dtype=np.uint32))

        assert "ndarray" in summary
        assert "100x200" in summary
        assert "uint32" in summary

    def test_label_map_summary(self, single_square):
        from detoverlap.label_map import LabelMap
        from detoverlap.tracer import summarize

        assert summarize(LabelMap(single_square)) == "LabelMap(20x20)"

    def test_report_summary(self):
        from detoverlap.models import DetectionOverlapReport
        from detoverlap.tracer import summarize

        assert "DetectionOverlapReport" in summarize(DetectionOverlapReport())

    def test_summary_capped_length(self):
        from detoverlap.tracer import summarize

        large_dict = {f"key_{i}": i for i in range(100)}

        assert len(summarize(large_dict, max_len=40)) <= 40

    def test_collections(self):
        from detoverlap.tracer import summarize

        assert summarize([1, 2, 3]) == "list(len=3,first=int)"
        assert summarize({1, 2}) == "set(len=2)"
        assert summarize(None) == "None"
        assert summarize(3) == "3"


class TestTracerSpan:
    """Tests for spans and events."""

    def test_span_nesting(self, capsys):
        from detoverlap.tracer import Tracer, TracerConfig

        tracer = Tracer(TracerConfig(enabled=True, level="INFO"))

        with tracer.span("outer", module="test"):
            with tracer.span("inner", module="test"):
                tracer.event("inside")

        lines = capsys.readouterr().err.strip().split("\n")

        assert len(lines) == 5
        assert "    test:inner  inside" in lines[2]

    def test_level_filtering(self, capsys):
        from detoverlap.tracer import Tracer, TracerConfig

        tracer = Tracer(TracerConfig(enabled=True, level="DEBUG"))
        tracer.event("debug message", level="DEBUG")
        tracer.event("per variable", level="ALL")

        err = capsys.readouterr().err
        assert "debug message" in err
        assert "per variable" not in err

    def test_disabled_no_output(self, capsys):
        from detoverlap.tracer import Tracer

        tracer = Tracer()
        with tracer.span("test", module="test"):
            tracer.event("should not appear")

        assert capsys.readouterr().err == ""

    def test_span_error_reraised(self, capsys):
        from detoverlap.tracer import Tracer, TracerConfig

        tracer = Tracer(TracerConfig(enabled=True))

        with pytest.raises(KeyError):
            with tracer.span("failing", module="test"):
                raise KeyError("boom")

        assert "failed" in capsys.readouterr().err
        tracer.event("after")
        assert "after" in capsys.readouterr().err

    def test_json_output(self, capsys):
        from detoverlap.tracer import Tracer, TracerConfig

        tracer = Tracer(TracerConfig(enabled=True, json_output=True))
        tracer.event("hello", count=3)

        lines = capsys.readouterr().err.strip().split("\n")
        record = json.loads(lines[1])
        assert record["message"] == "hello count=3"
        assert record["meta"] == {"count": "3"}

    def test_pipeline_uses_given_tracer(self, single_square, capsys):
        from detoverlap.pipeline import detection_overlap
        from detoverlap.tracer import Tracer, TracerConfig, get_tracer

        tracer = Tracer(TracerConfig(enabled=True, level="DEBUG"))
        detection_overlap(single_square, single_square, tracer=tracer)

        err = capsys.readouterr().err
        assert "there are 1 ground truth regions" in err
        assert not get_tracer().config.enabled

    def test_pipeline_gets_own_tracer_with_global_settings(self, single_square, capsys):
        from detoverlap.pipeline import detection_overlap
        from detoverlap.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="DEBUG")
        try:
            with get_tracer().span("outer", module="test"):
                detection_overlap(single_square, single_square)
        finally:
            configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "there are 1 ground truth regions" in err
        assert " pipeline:detection_overlap  start" in err
        assert "   pipeline:detection_overlap  start" not in err


class TestTraceDecorator:
    """Tests for the @trace decorator."""

    def test_decorator_runs_function(self):
        from detoverlap.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="test_func")
        def my_func(x):
            return x * 2

        assert my_func(5) == 10

    def test_decorator_with_exception(self):
        from detoverlap.tracer import configure_tracer, trace

        configure_tracer(enabled=True)

        @trace(label="failing_func")
        def failing_func():
            raise ValueError("test error")

        try:
            with pytest.raises(ValueError):
                failing_func()
        finally:
            configure_tracer(enabled=False)
