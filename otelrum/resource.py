"""
Resource assembly for the RUM agent.

Usage:
    from otelrum.host import AttributeSource
    from otelrum.config import AwsRumConfig
    from otelrum.resource import create_default

    resource = create_default(
        AttributeSource(application),
        AwsRumConfig("us-east-1", "app-monitor-id"),
    )
"""

from __future__ import annotations

from typing import Optional

from opentelemetry.sdk.resources import Resource

from otelrum.attributes import RumAttributes
from otelrum.config import AwsRumConfig
from otelrum.host import AttributeSource


def os_description(release: str, build_id: str, api_level: int) -> str:
    """Human-readable OS summary, e.g. ``Android Version 14 (Build UP1A.1 API level 34)``."""
    return (
        f"{RumAttributes.ANDROID_OS_NAME} Version {release} "
        f"(Build {build_id} API level {api_level})"
    )


def create_default(
    source: AttributeSource,
    config: AwsRumConfig,
    app_name: Optional[str] = None,
    base: Optional[Resource] = None,
) -> Resource:
    """
    Assemble the resource describing this application, device and OS.

    Keys are written in a fixed order on top of ``base`` (empty by
    default); a later write for the same key wins. Region and app
    monitor id are copied verbatim from ``config``, empty strings
    included. The alias is only written when set.

    Args:
        source: Fail-safe host identity facts.
        config: Configuration carrying the AWS deployment identifiers.
        app_name: Explicit service name, overriding the looked-up
            application label.
        base: Resource to start from, e.g. ``Resource.create()`` for the
            SDK's telemetry.sdk.* defaults.

    Returns:
        An immutable ``Resource``.
    """
    if base is None:
        base = Resource.get_empty()

    model = source.device_model
    attrs: dict[str, str] = {}
    attrs[RumAttributes.SERVICE_NAME] = app_name or source.app_name
    attrs[RumAttributes.RUM_SDK_VERSION] = source.sdk_version
    attrs[RumAttributes.DEVICE_MODEL_NAME] = model
    attrs[RumAttributes.DEVICE_MODEL_IDENTIFIER] = model
    attrs[RumAttributes.DEVICE_MANUFACTURER] = source.device_manufacturer
    attrs[RumAttributes.OS_NAME] = RumAttributes.ANDROID_OS_NAME
    attrs[RumAttributes.OS_TYPE] = RumAttributes.ANDROID_OS_TYPE
    attrs[RumAttributes.OS_VERSION] = source.os_version
    attrs[RumAttributes.OS_DESCRIPTION] = os_description(
        source.os_version, source.os_build_id, source.os_api_level
    )
    attrs[RumAttributes.AWS_REGION] = config.aws_region or ""
    attrs[RumAttributes.RUM_APP_MONITOR_ID] = config.rum_app_monitor or ""
    if config.rum_alias:
        attrs[RumAttributes.RUM_APP_MONITOR_ALIAS] = config.rum_alias

    return base.merge(Resource(attrs))


__all__ = [
    "create_default",
    "os_description",
]
