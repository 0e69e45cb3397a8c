"""
otelrum: AWS RUM resource and configuration for OpenTelemetry
=============================================================

Builds the identity resource and the chainable configuration a
real-user-monitoring agent hands to its OpenTelemetry runtime at startup.

Quick Start::

    from otelrum import AttributeSource, AwsOpenTelemetryRumBuilder, AwsRumConfig

    config = (
        AwsRumConfig("us-east-1", "app-monitor-id")
        .set_global_attributes({"toolkit": "jetpack compose"})
        .disable_screen_attributes()
    )

    rum = (
        AwsOpenTelemetryRumBuilder.create(AttributeSource(application), config)
        .add_span_exporter_customizer(lambda exporter: exporter)
        .build()
    )

What otelrum does:
  - Assembles a deterministic Resource (service, device, OS, AWS region
    and app monitor id); metadata lookups never raise
  - Provides a fluent config whose feature flags can only be disabled
  - Applies exporter customizers in registration order

What otelrum does NOT do:
  - Export telemetry itself; that is the runtime's job
  - Sign requests or fetch AWS credentials
"""

# ── Resource ──────────────────────────────────────────────────────────

from otelrum.attributes import RumAttributes
from otelrum.host import (
    SDK_VERSION,
    UNKNOWN_SERVICE_NAME,
    ApplicationContext,
    AttributeSource,
    BuildInfo,
    trap_to,
)
from otelrum.resource import create_default, os_description

# ── Configuration ─────────────────────────────────────────────────────

from otelrum.config import AwsRumConfig, DiskBufferingConfig, RumConfig

# ── Builders ──────────────────────────────────────────────────────────

from otelrum.builder import (
    AwsOpenTelemetryRumBuilder,
    RumRuntimeBuilder,
    compose_customizers,
)
from otelrum.sdk import OpenTelemetryRum, RumInstrumentation, SdkRumBuilder
from otelrum.errors import BuilderClosedError, ConfigFrozenError, RumError

__version__ = SDK_VERSION
__all__ = [
    # ── Resource ──
    "RumAttributes",
    "SDK_VERSION",
    "UNKNOWN_SERVICE_NAME",
    "ApplicationContext",
    "AttributeSource",
    "BuildInfo",
    "trap_to",
    "create_default",
    "os_description",
    # ── Configuration ──
    "AwsRumConfig",
    "DiskBufferingConfig",
    "RumConfig",
    # ── Builders ──
    "AwsOpenTelemetryRumBuilder",
    "RumRuntimeBuilder",
    "compose_customizers",
    "OpenTelemetryRum",
    "RumInstrumentation",
    "SdkRumBuilder",
    # ── Errors ──
    "BuilderClosedError",
    "ConfigFrozenError",
    "RumError",
]
