"""
Configuration and registry for global settings

Components read cross-cutting settings (such as dispatch tracing) through
this module instead of receiving them as parameters.
"""

from methodhooks.core.config.registry import (
    ConfigRegistry,
    get_config,
    set_trace_dispatch,
    get_trace_dispatch,
    clear_config,
)

__all__ = [
    "ConfigRegistry",
    "get_config",
    "set_trace_dispatch",
    "get_trace_dispatch",
    "clear_config",
]
