"""Exceptions raised by the otelrum builders."""


class RumError(RuntimeError):
    """Base class for otelrum lifecycle errors."""


class BuilderClosedError(RumError):
    """Raised when a builder is used after ``build()`` has run."""


class ConfigFrozenError(RumError):
    """Raised when a configuration is mutated after it was consumed."""


__all__ = [
    "RumError",
    "BuilderClosedError",
    "ConfigFrozenError",
]
