"""
Global configuration registry for methodhooks

This module provides a centralized registry for settings that apply to every
hooked operation, so the interceptor can read them without threading options
through each wrapper.
"""

import os

from methodhooks.core.utils.logger import get_logger

logger = get_logger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


class ConfigRegistry:
    """
    Global configuration registry

    This class manages global configuration like:
    - Dispatch tracing (one debug log line per hook invocation)
    """

    def __init__(self):
        """Initialize registry from environment defaults"""
        # Default: read from METHODHOOKS_TRACE_DISPATCH, off when unset
        self._trace_dispatch: bool = _env_flag("METHODHOOKS_TRACE_DISPATCH")

    def set_trace_dispatch(self, enabled: bool) -> None:
        """
        Enable or disable dispatch tracing

        Args:
            enabled: If True, the interceptor logs every hook it runs at debug level
        """
        self._trace_dispatch = bool(enabled)
        logger.debug(f"Set trace_dispatch: {self._trace_dispatch}")

    def get_trace_dispatch(self) -> bool:
        """
        Get whether dispatch tracing is enabled

        Returns:
            True if hook invocations are traced
        """
        return self._trace_dispatch

    def clear(self) -> None:
        """Reset configuration to environment defaults (useful for testing)"""
        self._trace_dispatch = _env_flag("METHODHOOKS_TRACE_DISPATCH")
        logger.debug("Cleared configuration registry")


# Global registry instance (singleton pattern)
_global_registry = ConfigRegistry()


def _get_registry() -> ConfigRegistry:
    return _global_registry


def get_config() -> ConfigRegistry:
    """
    Get the current configuration registry

    Returns:
        ConfigRegistry instance
    """
    return _get_registry()


def set_trace_dispatch(enabled: bool) -> None:
    """
    Enable or disable dispatch tracing

    Args:
        enabled: If True, every hook invocation is logged at debug level
    """
    _get_registry().set_trace_dispatch(enabled)


def get_trace_dispatch() -> bool:
    """
    Get whether dispatch tracing is enabled

    Returns:
        True if hook invocations are traced
    """
    return _get_registry().get_trace_dispatch()


def clear_config() -> None:
    """Reset configuration to environment defaults (useful for testing)"""
    _get_registry().clear()


__all__ = [
    "ConfigRegistry",
    "get_config",
    "set_trace_dispatch",
    "get_trace_dispatch",
    "clear_config",
]
