"""
OpenTelemetry SDK runtime for the RUM builder.

``SdkRumBuilder`` is the default runtime wrapped by
``AwsOpenTelemetryRumBuilder``: it turns the assembled resource,
configuration, exporter customizers and instrumentations into a
``TracerProvider`` / ``LoggerProvider`` pair.

Instrumentations are objects with an ``install(rum)`` method. Besides the
ones registered explicitly, the builder discovers entry points in the
``otelrum.instrumentation`` group unless discovery was disabled on the
config.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Any, Optional, Protocol, runtime_checkable

from opentelemetry.context import Context
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import Span, SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter

from otelrum.builder import Customizer, compose_customizers
from otelrum.config import AttributesSupplier, AwsRumConfig
from otelrum.errors import BuilderClosedError

logger = logging.getLogger(__name__)

INSTRUMENTATION_ENTRY_POINT_GROUP = "otelrum.instrumentation"


@runtime_checkable
class RumInstrumentation(Protocol):
    """A unit of instrumentation installed into a built RUM client."""

    def install(self, rum: "OpenTelemetryRum") -> None:
        ...


class GlobalAttributesSpanProcessor(SpanProcessor):
    """Sets the configured global attributes on every span as it starts."""

    def __init__(self, supplier: AttributesSupplier):
        self._supplier = supplier

    def on_start(self, span: Span, parent_context: Optional[Context] = None) -> None:
        try:
            attributes = self._supplier()
        except Exception:
            logger.exception(
                "Global attributes supplier failed; span %r left without them", span.name
            )
            return
        if attributes:
            span.set_attributes(dict(attributes))


@dataclass(frozen=True)
class OpenTelemetryRum:
    """A built RUM client: the providers plus the resource and config they were built from."""

    resource: Resource
    config: AwsRumConfig
    tracer_provider: TracerProvider
    logger_provider: LoggerProvider

    def get_tracer(self, name: str, version: Optional[str] = None):
        return self.tracer_provider.get_tracer(name, version)

    def get_logger(self, name: str, version: Optional[str] = None):
        return self.logger_provider.get_logger(name, version)

    def shutdown(self) -> None:
        self.tracer_provider.shutdown()
        self.logger_provider.shutdown()


class SdkRumBuilder:
    """
    Runtime builder backed by ``opentelemetry-sdk``.

    Args:
        config: The agent configuration (read-only here).
        span_exporter: Base span exporter. Passed through the span
            customizers; no span export is configured when omitted.
        log_record_exporter: Base log record exporter. Passed through the
            log customizers; no log export is configured when omitted.

    Of the config, only the global attributes supplier and the
    instrumentation discovery flag are read here. The network, screen and
    SDK initialization flags and the disk buffering config are carried
    for runtimes that implement those features; this builder ignores them.
    """

    def __init__(
        self,
        config: AwsRumConfig,
        span_exporter: Optional[SpanExporter] = None,
        log_record_exporter: Optional[Any] = None,
    ):
        self._config = config
        self._span_exporter = span_exporter
        self._log_record_exporter = log_record_exporter
        self._resource = Resource.create()
        self._span_exporter_customizers: list[Customizer] = []
        self._log_record_exporter_customizers: list[Customizer] = []
        self._instrumentations: list[RumInstrumentation] = []
        self._built = False

    def set_resource(self, resource: Resource) -> "SdkRumBuilder":
        self._resource = resource
        return self

    def add_span_exporter_customizer(self, customizer: Customizer) -> "SdkRumBuilder":
        self._span_exporter_customizers.append(customizer)
        return self

    def add_log_record_exporter_customizer(self, customizer: Customizer) -> "SdkRumBuilder":
        self._log_record_exporter_customizers.append(customizer)
        return self

    def add_instrumentation(self, instrumentation: RumInstrumentation) -> "SdkRumBuilder":
        self._instrumentations.append(instrumentation)
        return self

    def build(self) -> OpenTelemetryRum:
        if self._built:
            raise BuilderClosedError("SdkRumBuilder.build() has already been called.")
        self._built = True

        tracer_provider = TracerProvider(resource=self._resource)
        supplier = self._config.global_attributes_supplier
        if supplier is not None:
            tracer_provider.add_span_processor(GlobalAttributesSpanProcessor(supplier))
        if self._span_exporter is not None:
            exporter = compose_customizers(self._span_exporter_customizers)(self._span_exporter)
            tracer_provider.add_span_processor(BatchSpanProcessor(exporter))

        logger_provider = LoggerProvider(resource=self._resource)
        if self._log_record_exporter is not None:
            exporter = compose_customizers(self._log_record_exporter_customizers)(
                self._log_record_exporter
            )
            logger_provider.add_log_record_processor(BatchLogRecordProcessor(exporter))

        rum = OpenTelemetryRum(
            resource=self._resource,
            config=self._config,
            tracer_provider=tracer_provider,
            logger_provider=logger_provider,
        )

        for instrumentation in self._instrumentations:
            instrumentation.install(rum)
        if self._config.instrumentation_discovery_enabled:
            self._install_discovered(rum)
        return rum

    @staticmethod
    def _install_discovered(rum: OpenTelemetryRum) -> None:
        for entry_point in entry_points(group=INSTRUMENTATION_ENTRY_POINT_GROUP):
            try:
                loaded = entry_point.load()
                instrumentation = loaded() if isinstance(loaded, type) else loaded
                instrumentation.install(rum)
            except Exception:
                logger.exception("Failed to install instrumentation %r", entry_point.name)
            else:
                logger.debug("Installed instrumentation %r", entry_point.name)


__all__ = [
    "GlobalAttributesSpanProcessor",
    "INSTRUMENTATION_ENTRY_POINT_GROUP",
    "OpenTelemetryRum",
    "RumInstrumentation",
    "SdkRumBuilder",
]
