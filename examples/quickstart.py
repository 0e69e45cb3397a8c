"""otelrum Quickstart: pip install otel-rum-agent"""

from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from otelrum import (
    AttributeSource,
    AwsOpenTelemetryRumBuilder,
    AwsRumConfig,
    SdkRumBuilder,
)

config = (
    AwsRumConfig.from_env()
    .set_global_attributes({"toolkit": "quickstart"})
    .disable_instrumentation_discovery()
)

rum = (
    AwsOpenTelemetryRumBuilder.create(
        AttributeSource(),
        config,
        SdkRumBuilder(config, span_exporter=ConsoleSpanExporter()),
        app_name="quickstart",
    )
    .add_span_exporter_customizer(lambda exporter: exporter)
    .build()
)

with rum.get_tracer("quickstart").start_as_current_span("app.start"):
    pass

print(f"RUM resource: {dict(rum.resource.attributes)}")
rum.shutdown()
