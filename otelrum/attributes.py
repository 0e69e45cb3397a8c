"""
RUM Resource Attributes
=======================

Attribute keys written to the OpenTelemetry Resource that identifies a
RUM agent process. Keys outside the AWS namespace follow the OTel
semantic conventions for service, device and OS resources.

These follow OTel naming conventions:
- Lowercase, dot-separated namespace hierarchy
- Domain-first approach: {namespace}.{component}.{property}
"""


class RumAttributes:
    """Constants for resource attributes set by the RUM agent."""

    # -------------------------------------------------------
    # Service
    # -------------------------------------------------------
    SERVICE_NAME = "service.name"
    RUM_SDK_VERSION = "rum.sdk.version"

    # -------------------------------------------------------
    # Device
    # -------------------------------------------------------
    DEVICE_MODEL_NAME = "device.model.name"
    DEVICE_MODEL_IDENTIFIER = "device.model.identifier"
    DEVICE_MANUFACTURER = "device.manufacturer"

    # -------------------------------------------------------
    # Operating system
    # -------------------------------------------------------
    OS_NAME = "os.name"
    OS_TYPE = "os.type"
    OS_VERSION = "os.version"
    OS_DESCRIPTION = "os.description"

    # -------------------------------------------------------
    # AWS deployment identifiers
    # -------------------------------------------------------
    AWS_REGION = "aws.region"
    RUM_APP_MONITOR_ID = "aws.rum.appmonitor.id"
    RUM_APP_MONITOR_ALIAS = "aws.rum.appmonitor.alias"

    # -------------------------------------------------------
    # Fixed values
    # -------------------------------------------------------
    ANDROID_OS_NAME = "Android"
    ANDROID_OS_TYPE = "linux"

    # Keys every assembled resource must carry.
    REQUIRED = (
        SERVICE_NAME,
        RUM_SDK_VERSION,
        DEVICE_MODEL_NAME,
        DEVICE_MODEL_IDENTIFIER,
        DEVICE_MANUFACTURER,
        OS_NAME,
        OS_TYPE,
        OS_VERSION,
        OS_DESCRIPTION,
        AWS_REGION,
        RUM_APP_MONITOR_ID,
    )
