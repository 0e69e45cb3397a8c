"""
Tests for otelrum.builder: the AWS RUM builder decorator.

A recording runtime builder stands in for the telemetry runtime and
applies the customizers it receives to marker exporters, the way a real
runtime does when it constructs its exporters.
"""

import pytest

from otelrum.attributes import RumAttributes
from otelrum.builder import AwsOpenTelemetryRumBuilder, compose_customizers
from otelrum.config import AwsRumConfig
from otelrum.errors import BuilderClosedError, ConfigFrozenError
from otelrum.host import AttributeSource, BuildInfo
import otelrum.sdk as rum_sdk
from otelrum.sdk import OpenTelemetryRum


class RecordingRuntimeBuilder:
    """Runtime builder that records every call and builds a plain dict."""

    def __init__(self):
        self.calls = []
        self.resource = None
        self.span_customizers = []
        self.log_customizers = []
        self.instrumentations = []

    def set_resource(self, resource):
        self.calls.append("set_resource")
        self.resource = resource
        return self

    def add_span_exporter_customizer(self, customizer):
        self.calls.append("add_span_exporter_customizer")
        self.span_customizers.append(customizer)
        return self

    def add_log_record_exporter_customizer(self, customizer):
        self.calls.append("add_log_record_exporter_customizer")
        self.log_customizers.append(customizer)
        return self

    def add_instrumentation(self, instrumentation):
        self.calls.append("add_instrumentation")
        self.instrumentations.append(instrumentation)
        return self

    def build(self):
        self.calls.append("build")
        span_exporter = "span-exporter"
        for customizer in self.span_customizers:
            span_exporter = customizer(span_exporter)
        log_exporter = "log-exporter"
        for customizer in self.log_customizers:
            log_exporter = customizer(log_exporter)
        return {
            "resource": self.resource,
            "span_exporter": span_exporter,
            "log_exporter": log_exporter,
            "instrumentations": list(self.instrumentations),
        }


def _tag(label):
    return lambda exporter: f"{label}({exporter})"


@pytest.fixture
def runtime():
    return RecordingRuntimeBuilder()


@pytest.fixture
def config():
    return AwsRumConfig("test-region", "test-app-monitor-id")


@pytest.fixture
def builder(runtime, config):
    source = AttributeSource(None, BuildInfo("Pixel 8", "Google", "14", "UP1A.1", 34))
    return AwsOpenTelemetryRumBuilder.create(source, config, runtime)


class TestComposeCustomizers:

    def test_left_to_right(self):
        assert compose_customizers([_tag("f1"), _tag("f2")])("e") == "f2(f1(e))"

    def test_empty_is_identity(self):
        exporter = object()
        assert compose_customizers([])(exporter) is exporter

    def test_snapshot_of_sequence(self):
        customizers = [_tag("f1")]
        composed = compose_customizers(customizers)
        customizers.append(_tag("f2"))
        assert composed("e") == "f1(e)"


class TestRegistration:

    def test_methods_return_same_instance(self, builder):
        assert builder.add_span_exporter_customizer(_tag("s")) is builder
        assert builder.add_log_record_exporter_customizer(_tag("l")) is builder
        assert builder.add_instrumentation(object()) is builder

    def test_none_span_customizer_rejected(self, builder):
        builder.add_span_exporter_customizer(_tag("f1"))
        with pytest.raises(ValueError, match="span_exporter_customizer"):
            builder.add_span_exporter_customizer(None)
        assert len(builder.span_exporter_customizers) == 1

    def test_none_log_customizer_rejected(self, builder):
        with pytest.raises(ValueError, match="log_record_exporter_customizer"):
            builder.add_log_record_exporter_customizer(None)
        assert builder.log_record_exporter_customizers == ()

    def test_registration_order_preserved(self, builder):
        first, second = _tag("f1"), _tag("f2")
        builder.add_span_exporter_customizer(first).add_span_exporter_customizer(second)
        assert builder.span_exporter_customizers == (first, second)


class TestBuild:

    def test_span_customizers_applied_in_registration_order(self, builder):
        builder.add_span_exporter_customizer(_tag("f1")).add_span_exporter_customizer(_tag("f2"))
        result = builder.build()
        assert result["span_exporter"] == "f2(f1(span-exporter))"

    def test_log_customizers_applied_in_registration_order(self, builder):
        (
            builder.add_log_record_exporter_customizer(_tag("g1"))
            .add_log_record_exporter_customizer(_tag("g2"))
            .add_log_record_exporter_customizer(_tag("g3"))
        )
        result = builder.build()
        assert result["log_exporter"] == "g3(g2(g1(log-exporter)))"

    def test_exporter_kinds_are_independent(self, builder):
        builder.add_span_exporter_customizer(_tag("s"))
        result = builder.build()
        assert result["span_exporter"] == "s(span-exporter)"
        assert result["log_exporter"] == "log-exporter"

    def test_resource_handed_to_runtime(self, builder, runtime):
        builder.build()
        attributes = runtime.resource.attributes
        assert attributes[RumAttributes.AWS_REGION] == "test-region"
        assert attributes[RumAttributes.RUM_APP_MONITOR_ID] == "test-app-monitor-id"
        assert attributes[RumAttributes.DEVICE_MODEL_NAME] == "Pixel 8"

    def test_app_name_override(self, runtime, config):
        builder = AwsOpenTelemetryRumBuilder.create(
            AttributeSource(None, BuildInfo()), config, runtime, app_name="my-app"
        )
        builder.build()
        assert runtime.resource.attributes[RumAttributes.SERVICE_NAME] == "my-app"

    def test_instrumentations_forwarded_in_order(self, builder):
        first, second = object(), object()
        result = builder.add_instrumentation(first).add_instrumentation(second).build()
        assert result["instrumentations"] == [first, second]

    def test_resource_set_before_runtime_build(self, builder, runtime):
        builder.add_span_exporter_customizer(_tag("s")).build()
        assert runtime.calls[0] == "set_resource"
        assert runtime.calls[-1] == "build"

    def test_build_freezes_config(self, builder, config):
        builder.build()
        assert config.frozen
        with pytest.raises(ConfigFrozenError):
            config.set_aws_region("other")

    def test_default_runtime_is_sdk(self, config, monkeypatch):
        monkeypatch.setattr(rum_sdk, "entry_points", lambda group: [])
        builder = AwsOpenTelemetryRumBuilder.create(AttributeSource(None, BuildInfo()), config)
        rum = builder.build()
        try:
            assert isinstance(rum, OpenTelemetryRum)
            assert rum.resource.attributes[RumAttributes.AWS_REGION] == "test-region"
            assert rum.config is config
        finally:
            rum.shutdown()


class TestAfterBuild:

    @pytest.mark.parametrize(
        "call",
        [
            lambda b: b.add_span_exporter_customizer(_tag("late")),
            lambda b: b.add_log_record_exporter_customizer(_tag("late")),
            lambda b: b.add_instrumentation(object()),
            lambda b: b.build(),
        ],
    )
    def test_calls_after_build_rejected(self, builder, runtime, call):
        builder.build()
        with pytest.raises(BuilderClosedError):
            call(builder)
        assert runtime.calls.count("build") == 1
        assert builder.built
