"""
RUM agent configuration.

``RumConfig`` carries the feature toggles the telemetry runtime reads.
``AwsRumConfig`` is the fluent, chainable configuration handed to the
agent: it owns a ``RumConfig`` and adds the AWS deployment identifiers
(region, app monitor id, optional alias). Every mutator returns the
same instance::

    config = (
        AwsRumConfig()
        .set_aws_region("us-east-1")
        .set_rum_app_monitor("a1b2c3")
        .set_global_attributes({"toolkit": "jetpack compose"})
        .disable_screen_attributes()
    )
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from otelrum.errors import ConfigFrozenError

AttributeValue = Union[str, bool, int, float, Sequence[str], Sequence[bool], Sequence[int], Sequence[float]]
Attributes = Mapping[str, AttributeValue]
AttributesSupplier = Callable[[], Attributes]


@dataclass(frozen=True)
class DiskBufferingConfig:
    """Settings for buffering telemetry on disk before export."""

    enabled: bool = False
    max_cache_size: int = 60 * 1024 * 1024
    max_file_age_for_write_ms: int = 30 * 1000
    min_file_age_for_read_ms: int = 33 * 1000
    max_file_age_for_read_ms: int = 18 * 60 * 60 * 1000


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ValueError(f"Agent config '{name}' section must be an object.")
    return section


def _attribute_string(value: Any) -> str:
    # JSON booleans keep their JSON spelling.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class RumConfig:
    """
    Feature toggles read by the telemetry runtime.

    All flags start enabled and can only be turned off.
    """

    def __init__(self) -> None:
        self.global_attributes_supplier: Optional[AttributesSupplier] = None
        self.disk_buffering_config: Optional[DiskBufferingConfig] = None
        self.network_attributes_enabled = True
        self.sdk_initialization_events_enabled = True
        self.screen_attributes_enabled = True
        self.instrumentation_discovery_enabled = True

    def has_global_attributes(self) -> bool:
        return self.global_attributes_supplier is not None

    def __repr__(self) -> str:
        return (
            f"RumConfig(network_attributes_enabled={self.network_attributes_enabled}, "
            f"sdk_initialization_events_enabled={self.sdk_initialization_events_enabled}, "
            f"screen_attributes_enabled={self.screen_attributes_enabled}, "
            f"instrumentation_discovery_enabled={self.instrumentation_discovery_enabled}, "
            f"disk_buffering_config={self.disk_buffering_config!r})"
        )


class AwsRumConfig:
    """
    Chainable RUM configuration with AWS deployment identifiers.

    Args:
        aws_region: AWS region of the app monitor (e.g. "us-east-1").
        rum_app_monitor: CloudWatch RUM app monitor id.

    Both default to the empty string and can be set later with
    ``set_aws_region`` / ``set_rum_app_monitor``.
    """

    def __init__(self, aws_region: str = "", rum_app_monitor: str = ""):
        self._base = RumConfig()
        self._aws_region = aws_region
        self._rum_app_monitor = rum_app_monitor
        self._rum_alias: Optional[str] = None
        self._frozen = False

    # ===========================================================
    # Loading
    # ===========================================================

    @classmethod
    def from_env(cls) -> "AwsRumConfig":
        """Build a config from AWS_REGION, AWS_RUM_APP_MONITOR_ID and AWS_RUM_APP_MONITOR_ALIAS."""
        config = cls(
            os.getenv("AWS_REGION", "").strip(),
            os.getenv("AWS_RUM_APP_MONITOR_ID", "").strip(),
        )
        alias = os.getenv("AWS_RUM_APP_MONITOR_ALIAS", "").strip()
        if alias:
            config.set_rum_alias(alias)
        return config

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AwsRumConfig":
        """
        Build a config from a decoded agent config document.

        Expected shape::

            {
                "aws": {"region": "...", "rumAppMonitorId": "...", "rumAlias": "..."},
                "applicationAttributes": {"team": "checkout", "tier": 2},
                "features": {"networkAttributes": false, "screenAttributes": false, ...}
            }

        ``applicationAttributes`` become the global attributes, with every
        value converted to a string. ``features`` entries set to ``false``
        disable the matching flag (``networkAttributes``,
        ``screenAttributes``, ``sdkInitializationEvents``,
        ``instrumentationDiscovery``). Other sections, such as
        ``telemetry``, are left to the runtime.

        Raises:
            ValueError: If ``aws.region`` or ``aws.rumAppMonitorId`` is
                missing, or a section has the wrong shape.
        """
        aws = data.get("aws")
        if not isinstance(aws, Mapping):
            raise ValueError("Agent config is missing the 'aws' section.")
        missing = [key for key in ("region", "rumAppMonitorId") if not aws.get(key)]
        if missing:
            raise ValueError(f"Agent config 'aws' section is missing: {', '.join(missing)}")

        config = cls(str(aws["region"]), str(aws["rumAppMonitorId"]))
        if aws.get("rumAlias"):
            config.set_rum_alias(str(aws["rumAlias"]))

        attributes = _section(data, "applicationAttributes")
        if attributes:
            config.set_global_attributes(
                {str(key): _attribute_string(value) for key, value in attributes.items()}
            )

        features = _section(data, "features")
        toggles: dict[str, Callable[[], AwsRumConfig]] = {
            "networkAttributes": config.disable_network_attributes,
            "screenAttributes": config.disable_screen_attributes,
            "sdkInitializationEvents": config.disable_sdk_initialization_events,
            "instrumentationDiscovery": config.disable_instrumentation_discovery,
        }
        for name, disable in toggles.items():
            if features.get(name) is False:
                disable()
        return config

    # ===========================================================
    # Mutators
    # ===========================================================

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ConfigFrozenError("AwsRumConfig cannot be changed after the agent was built.")

    def set_global_attributes(
        self, attributes: Union[Attributes, AttributesSupplier]
    ) -> "AwsRumConfig":
        """Set attributes added to all telemetry; a mapping is wrapped in a constant supplier."""
        self._check_mutable()
        if callable(attributes):
            supplier = attributes
        else:
            snapshot = dict(attributes)
            supplier = lambda: snapshot  # noqa: E731
        self._base.global_attributes_supplier = supplier
        return self

    def disable_network_attributes(self) -> "AwsRumConfig":
        self._check_mutable()
        self._base.network_attributes_enabled = False
        return self

    def disable_sdk_initialization_events(self) -> "AwsRumConfig":
        self._check_mutable()
        self._base.sdk_initialization_events_enabled = False
        return self

    def disable_screen_attributes(self) -> "AwsRumConfig":
        self._check_mutable()
        self._base.screen_attributes_enabled = False
        return self

    def disable_instrumentation_discovery(self) -> "AwsRumConfig":
        self._check_mutable()
        self._base.instrumentation_discovery_enabled = False
        return self

    def set_disk_buffering_config(
        self, disk_buffering_config: DiskBufferingConfig
    ) -> "AwsRumConfig":
        self._check_mutable()
        self._base.disk_buffering_config = disk_buffering_config
        return self

    def set_aws_region(self, aws_region: str) -> "AwsRumConfig":
        self._check_mutable()
        self._aws_region = aws_region
        return self

    def set_rum_app_monitor(self, rum_app_monitor: str) -> "AwsRumConfig":
        self._check_mutable()
        self._rum_app_monitor = rum_app_monitor
        return self

    def set_rum_alias(self, rum_alias: Optional[str]) -> "AwsRumConfig":
        self._check_mutable()
        self._rum_alias = rum_alias
        return self

    def freeze(self) -> "AwsRumConfig":
        """Reject further mutation. Called once the runtime consumes the config."""
        self._frozen = True
        return self

    # ===========================================================
    # Read access
    # ===========================================================

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def base(self) -> RumConfig:
        return self._base

    @property
    def aws_region(self) -> str:
        return self._aws_region

    @property
    def rum_app_monitor(self) -> str:
        return self._rum_app_monitor

    @property
    def rum_alias(self) -> Optional[str]:
        return self._rum_alias

    @property
    def global_attributes_supplier(self) -> Optional[AttributesSupplier]:
        return self._base.global_attributes_supplier

    @property
    def disk_buffering_config(self) -> Optional[DiskBufferingConfig]:
        return self._base.disk_buffering_config

    @property
    def network_attributes_enabled(self) -> bool:
        return self._base.network_attributes_enabled

    @property
    def sdk_initialization_events_enabled(self) -> bool:
        return self._base.sdk_initialization_events_enabled

    @property
    def screen_attributes_enabled(self) -> bool:
        return self._base.screen_attributes_enabled

    @property
    def instrumentation_discovery_enabled(self) -> bool:
        return self._base.instrumentation_discovery_enabled

    def __repr__(self) -> str:
        return (
            f"AwsRumConfig(aws_region={self._aws_region!r}, "
            f"rum_app_monitor={self._rum_app_monitor!r}, base={self._base!r})"
        )


__all__ = [
    "Attributes",
    "AttributesSupplier",
    "AwsRumConfig",
    "DiskBufferingConfig",
    "RumConfig",
]
