"""
Core hook interception modules

- types.py: Hook stages and callable type aliases
- exceptions.py: Registration error taxonomy
- registry.py: Per-scope hook storage and scope resolution
- interceptor.py: Wrap-once installation and hook dispatch
- hooks.py: Public registration API (MethodHooks mixin, add_hook)
- inspection.py: Read-only listing of registered hooks
- config/: Global configuration (dispatch tracing)
- utils/: Logging and helpers
"""

from methodhooks.core.types import (
    HookStage,
    ScopeKind,
    HookCallable,
    VALID_STAGES,
    ACTIVE_STAGES,
)
from methodhooks.core.exceptions import (
    MethodHooksError,
    InvalidStageError,
    UnknownOperationError,
    ConflictingHookSpecificationError,
    NotCallableError,
    IncompatibleHookError,
    ScopeUnavailableError,
)
from methodhooks.core.registry import (
    HookRegistry,
    get_type_registry,
    get_instance_registry,
    resolve_scope_chain,
)
from methodhooks.core.interceptor import ensure_wrapped, find_operation, is_hook_wrapper
from methodhooks.core.hooks import MethodHooks, add_hook, get_hooks, register_hook
from methodhooks.core.inspection import HookInfo, describe_hooks, wrapped_operations
from methodhooks.core.config import (
    get_config,
    set_trace_dispatch,
    get_trace_dispatch,
    clear_config,
)

__all__ = [
    # Types
    "HookStage",
    "ScopeKind",
    "HookCallable",
    "VALID_STAGES",
    "ACTIVE_STAGES",
    # Errors
    "MethodHooksError",
    "InvalidStageError",
    "UnknownOperationError",
    "ConflictingHookSpecificationError",
    "NotCallableError",
    "IncompatibleHookError",
    "ScopeUnavailableError",
    # Registry
    "HookRegistry",
    "get_type_registry",
    "get_instance_registry",
    "resolve_scope_chain",
    # Interceptor
    "ensure_wrapped",
    "find_operation",
    "is_hook_wrapper",
    # Public API
    "MethodHooks",
    "add_hook",
    "get_hooks",
    "register_hook",
    # Inspection
    "HookInfo",
    "describe_hooks",
    "wrapped_operations",
    # Configuration
    "get_config",
    "set_trace_dispatch",
    "get_trace_dispatch",
    "clear_config",
]
