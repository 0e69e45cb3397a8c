"""
Host identity facts for the RUM resource.

``AttributeSource`` reads the application display name and the device/OS
build facts the resource is made of. Every accessor goes through
``trap_to``: a failed lookup yields a documented default, never an
exception, so a cosmetic metadata problem cannot abort agent startup.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TypeVar, runtime_checkable

SDK_VERSION = "0.1.0"

UNKNOWN_SERVICE_NAME = "unknown_service:android"
UNKNOWN = "unknown"

T = TypeVar("T")


def trap_to(fn: Callable[[], Optional[T]], default: T) -> T:
    """Call ``fn`` and return its result, or ``default`` if it raises or returns None."""
    try:
        value = fn()
    except Exception:  # noqa: BLE001
        return default
    return default if value is None else value


@runtime_checkable
class ApplicationContext(Protocol):
    """The slice of a host application needed to resolve its display name."""

    label_res: int

    def get_string(self, resource_id: int) -> str:
        ...


@dataclass(frozen=True)
class BuildInfo:
    """Device and OS build facts, as reported by the host platform."""

    model: str = UNKNOWN
    manufacturer: str = UNKNOWN
    release: str = UNKNOWN
    build_id: str = UNKNOWN
    sdk_int: int = 0

    @classmethod
    def from_host(cls) -> "BuildInfo":
        """Best-effort build facts for hosts without a device bridge."""
        return cls(
            model=trap_to(lambda: platform.machine() or None, UNKNOWN),
            manufacturer=trap_to(lambda: platform.system() or None, UNKNOWN),
            release=trap_to(lambda: platform.release() or None, UNKNOWN),
            build_id=trap_to(lambda: platform.version() or None, UNKNOWN),
        )


class AttributeSource:
    """
    Read-only, fail-safe accessors for application, device and OS identity.

    Args:
        application: Host application context used to look up the
            display name. When omitted, ``app_name`` is the sentinel
            ``UNKNOWN_SERVICE_NAME``.
        build: Device/OS build facts. Defaults to ``BuildInfo.from_host()``.
        sdk_version: Version reported as ``rum.sdk.version``.
    """

    def __init__(
        self,
        application: Optional[ApplicationContext] = None,
        build: Optional[BuildInfo] = None,
        sdk_version: str = SDK_VERSION,
    ):
        self._application = application
        self._build = build if build is not None else BuildInfo.from_host()
        self._sdk_version = sdk_version

    @property
    def app_name(self) -> str:
        return trap_to(self._read_app_name, UNKNOWN_SERVICE_NAME)

    def _read_app_name(self) -> Optional[str]:
        app = self._application
        # An empty label counts as unreadable.
        return app.get_string(app.label_res) or None

    @property
    def sdk_version(self) -> str:
        return trap_to(lambda: self._sdk_version, UNKNOWN)

    @property
    def device_model(self) -> str:
        return trap_to(lambda: self._build.model, UNKNOWN)

    @property
    def device_manufacturer(self) -> str:
        return trap_to(lambda: self._build.manufacturer, UNKNOWN)

    @property
    def os_version(self) -> str:
        return trap_to(lambda: self._build.release, UNKNOWN)

    @property
    def os_build_id(self) -> str:
        return trap_to(lambda: self._build.build_id, UNKNOWN)

    @property
    def os_api_level(self) -> int:
        return trap_to(lambda: int(self._build.sdk_int), 0)


__all__ = [
    "SDK_VERSION",
    "UNKNOWN_SERVICE_NAME",
    "ApplicationContext",
    "AttributeSource",
    "BuildInfo",
    "trap_to",
]
