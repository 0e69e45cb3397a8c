"""
AWS RUM Builder
===============

Decorates a telemetry runtime builder with the AWS RUM resource and
configuration. Exporter customizers are queued in registration order and
handed to the runtime as one composed function per exporter kind, so for
customizers ``f1`` then ``f2`` every exporter ``e`` the runtime creates
becomes ``f2(f1(e))``.

Usage:
    from otelrum import AttributeSource, AwsOpenTelemetryRumBuilder, AwsRumConfig

    rum = (
        AwsOpenTelemetryRumBuilder.create(
            AttributeSource(application),
            AwsRumConfig("us-east-1", "app-monitor-id"),
        )
        .add_span_exporter_customizer(lambda exporter: exporter)
        .build()
    )
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Optional, Protocol, Sequence, TypeVar

from opentelemetry.sdk.resources import Resource

from otelrum.config import AwsRumConfig
from otelrum.errors import BuilderClosedError
from otelrum.host import AttributeSource
from otelrum.resource import create_default

logger = logging.getLogger(__name__)

E = TypeVar("E")
Customizer = Callable[[Any], Any]


def compose_customizers(customizers: Sequence[Callable[[E], E]]) -> Callable[[E], E]:
    """Left-fold ``customizers`` into one function: ``[f1, f2]`` becomes ``f2(f1(e))``."""
    chain = tuple(customizers)

    def _apply(exporter: E) -> E:
        return functools.reduce(lambda acc, fn: fn(acc), chain, exporter)

    return _apply


class RumRuntimeBuilder(Protocol):
    """The telemetry runtime builder that ``AwsOpenTelemetryRumBuilder`` decorates."""

    def set_resource(self, resource: Resource) -> Any:
        ...

    def add_span_exporter_customizer(self, customizer: Customizer) -> Any:
        ...

    def add_log_record_exporter_customizer(self, customizer: Customizer) -> Any:
        ...

    def add_instrumentation(self, instrumentation: Any) -> Any:
        ...

    def build(self) -> Any:
        ...


class AwsOpenTelemetryRumBuilder:
    """
    Single-use builder for a RUM runtime client.

    Holds the configuration, the host attribute source, ordered exporter
    customizers and instrumentations. ``build()`` is terminal: any call
    made afterwards raises ``BuilderClosedError``.
    """

    def __init__(
        self,
        source: AttributeSource,
        config: AwsRumConfig,
        runtime_builder: RumRuntimeBuilder,
        app_name: Optional[str] = None,
    ):
        self._source = source
        self._config = config
        self._runtime_builder = runtime_builder
        self._app_name = app_name
        self._span_exporter_customizers: list[Customizer] = []
        self._log_record_exporter_customizers: list[Customizer] = []
        self._instrumentations: list[Any] = []
        self._built = False

    @classmethod
    def create(
        cls,
        source: AttributeSource,
        config: AwsRumConfig,
        runtime_builder: Optional[RumRuntimeBuilder] = None,
        app_name: Optional[str] = None,
    ) -> "AwsOpenTelemetryRumBuilder":
        """
        Create a builder, defaulting to the OpenTelemetry SDK runtime.

        Args:
            source: Host identity facts for the resource.
            config: Agent configuration; frozen when ``build()`` runs.
            runtime_builder: Runtime builder to decorate. Defaults to
                ``otelrum.sdk.SdkRumBuilder(config)``.
            app_name: Explicit service name overriding the application label.
        """
        if runtime_builder is None:
            from otelrum.sdk import SdkRumBuilder

            runtime_builder = SdkRumBuilder(config)
        return cls(source, config, runtime_builder, app_name=app_name)

    @property
    def built(self) -> bool:
        return self._built

    @property
    def span_exporter_customizers(self) -> tuple[Customizer, ...]:
        return tuple(self._span_exporter_customizers)

    @property
    def log_record_exporter_customizers(self) -> tuple[Customizer, ...]:
        return tuple(self._log_record_exporter_customizers)

    def _check_open(self) -> None:
        if self._built:
            raise BuilderClosedError("AwsOpenTelemetryRumBuilder.build() has already been called.")

    def add_span_exporter_customizer(self, customizer: Customizer) -> "AwsOpenTelemetryRumBuilder":
        """Queue a transformation applied to every span exporter the runtime creates."""
        self._check_open()
        if customizer is None:
            raise ValueError("span_exporter_customizer must not be None")
        self._span_exporter_customizers.append(customizer)
        return self

    def add_log_record_exporter_customizer(
        self, customizer: Customizer
    ) -> "AwsOpenTelemetryRumBuilder":
        """Queue a transformation applied to every log record exporter the runtime creates."""
        self._check_open()
        if customizer is None:
            raise ValueError("log_record_exporter_customizer must not be None")
        self._log_record_exporter_customizers.append(customizer)
        return self

    def add_instrumentation(self, instrumentation: Any) -> "AwsOpenTelemetryRumBuilder":
        self._check_open()
        self._instrumentations.append(instrumentation)
        return self

    def build(self) -> Any:
        """Assemble the resource, configure the wrapped runtime and build it."""
        self._check_open()
        self._built = True
        self._config.freeze()

        resource = create_default(self._source, self._config, app_name=self._app_name)
        runtime = self._runtime_builder
        runtime.set_resource(resource)
        if self._span_exporter_customizers:
            runtime.add_span_exporter_customizer(
                compose_customizers(self._span_exporter_customizers)
            )
        if self._log_record_exporter_customizers:
            runtime.add_log_record_exporter_customizer(
                compose_customizers(self._log_record_exporter_customizers)
            )
        for instrumentation in self._instrumentations:
            runtime.add_instrumentation(instrumentation)

        logger.debug(
            "Building RUM runtime for app monitor %r in %r "
            "(%d span customizers, %d log customizers, %d instrumentations)",
            self._config.rum_app_monitor,
            self._config.aws_region,
            len(self._span_exporter_customizers),
            len(self._log_record_exporter_customizers),
            len(self._instrumentations),
        )
        return runtime.build()


__all__ = [
    "AwsOpenTelemetryRumBuilder",
    "RumRuntimeBuilder",
    "compose_customizers",
]
