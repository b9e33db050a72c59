"""
methodhooks - Before/after/error hooks for existing methods

Attach observers to a named method of a class, or of one particular object,
without touching the method's definition:

    from methodhooks import MethodHooks

    class Greeter(MethodHooks):
        def greet(self, name):
            return "hi " + name

    Greeter.hook("before", "greet", lambda g, name: print(f"greeting {name}"))

Core modules (always included):
- core: Registry, interceptor, public API, inspection, configuration

Optional features (require extras):
- cli: `methodhooks hooks list|wrapped` / `methodhooks version` [cli]
"""

__version__ = "0.1.0"

from methodhooks.core import (
    HookStage,
    MethodHooks,
    add_hook,
    get_hooks,
    describe_hooks,
    HookInfo,
    MethodHooksError,
    InvalidStageError,
    UnknownOperationError,
    ConflictingHookSpecificationError,
    NotCallableError,
    IncompatibleHookError,
    ScopeUnavailableError,
    set_trace_dispatch,
    get_trace_dispatch,
    clear_config,
)

__all__ = [
    # Public API
    "HookStage",
    "MethodHooks",
    "add_hook",
    "get_hooks",
    "describe_hooks",
    "HookInfo",
    # Errors
    "MethodHooksError",
    "InvalidStageError",
    "UnknownOperationError",
    "ConflictingHookSpecificationError",
    "NotCallableError",
    "IncompatibleHookError",
    "ScopeUnavailableError",
    # Configuration
    "set_trace_dispatch",
    "get_trace_dispatch",
    "clear_config",
    # Version
    "__version__",
]
