"""
Call interceptor

Installs one wrapper per (class, operation) and runs the hook dispatch around
the original implementation on every call:

    before hooks -> original -> after hooks      (success)
    before hooks -> original -> error hooks      (original raised; re-raised)

Scopes are consulted in the order given by resolve_scope_chain (instance,
class, base classes), resolved again for every stage. Hook lists are read at
call time, so hooks registered after the wrapper was installed still run.

Coroutine operations get a coroutine wrapper with the same algorithm; hooks
returning awaitables are awaited there.
"""

import functools
import inspect
from typing import Any, Callable, Dict, Optional, Tuple

from methodhooks.core.config import get_trace_dispatch
from methodhooks.core.exceptions import UnknownOperationError
from methodhooks.core.registry import (
    get_type_registry,
    registry_lock,
    resolve_scope_chain,
)
from methodhooks.core.types import HookStage
from methodhooks.core.utils.helpers import callable_name
from methodhooks.core.utils.logger import get_logger

logger = get_logger(__name__)

WRAPPER_MARKER = "__methodhooks_operation__"

_MISSING = object()


def _resolve_static(cls: type, operation: str) -> Any:
    for klass in cls.__mro__:
        if operation in klass.__dict__:
            return klass.__dict__[operation]
    return _MISSING


def is_hook_wrapper(obj: Any) -> bool:
    """Check whether obj is a wrapper installed by ensure_wrapped"""
    return getattr(obj, WRAPPER_MARKER, None) is not None


def find_operation(cls: type, operation: str) -> Callable:
    """
    Resolve an operation (instance method) defined on cls or its bases

    Args:
        cls: Class to search
        operation: Method name

    Returns:
        The function currently implementing the operation

    Raises:
        UnknownOperationError: If no such method exists, or the attribute is
            not an instance method (functions, and callables binding like
            functions such as lru_cache wrappers, are)
    """
    if not isinstance(operation, str) or not operation:
        raise UnknownOperationError(cls, str(operation), "operation name must be a non-empty string")

    attr = _resolve_static(cls, operation)
    if attr is _MISSING:
        raise UnknownOperationError(cls, operation)
    if isinstance(attr, (staticmethod, classmethod)):
        raise UnknownOperationError(cls, operation, f"{type(attr).__name__} is not an instance method")
    if isinstance(attr, property):
        raise UnknownOperationError(cls, operation, "property is not an instance method")
    if isinstance(attr, (functools.partialmethod, functools.singledispatchmethod)):
        raise UnknownOperationError(
            cls, operation, f"{type(attr).__name__} is not supported, hook the function it wraps instead"
        )
    if inspect.isfunction(attr):
        return attr
    # Callables that bind like functions, e.g. functools.lru_cache / functools.cache
    if callable(attr) and not isinstance(attr, type) and hasattr(type(attr), "__get__"):
        return attr
    raise UnknownOperationError(cls, operation, f"{type(attr).__name__} attribute is not a method")


def is_coroutine_operation(cls: type, operation: str) -> bool:
    return inspect.iscoroutinefunction(find_operation(cls, operation))


def _is_shadowed(target: Any, operation: str, wrapper: Callable) -> bool:
    # A wrapper on a base class reached through super() or through a subclass
    # wrapper's delegation: the outer wrapper has already dispatched.
    resolved = _resolve_static(type(target), operation)
    return resolved is not wrapper and is_hook_wrapper(resolved)


def _hook_calls(target: Any, operation: str, stage: HookStage):
    # The chain is resolved per stage: a scope created by an earlier stage or
    # by the operation itself takes part in the stages after it.
    trace = get_trace_dispatch()
    for registry in resolve_scope_chain(target):
        for hook in registry.hooks_for(operation, stage):
            if trace:
                logger.debug(
                    f"Dispatching {stage.value} hook {callable_name(hook)} "
                    f"({registry.kind.value} scope {registry.owner_name}) for {operation}"
                )
            yield hook


def _run_hooks(
    target: Any,
    operation: str,
    stage: HookStage,
    args: Tuple[Any, ...],
    kwargs: Dict[str, Any],
    exc: Optional[BaseException] = None,
) -> None:
    for hook in _hook_calls(target, operation, stage):
        if exc is None:
            hook(target, *args, **kwargs)
        else:
            hook(target, exc, *args, **kwargs)


async def _run_hooks_async(
    target: Any,
    operation: str,
    stage: HookStage,
    args: Tuple[Any, ...],
    kwargs: Dict[str, Any],
    exc: Optional[BaseException] = None,
) -> None:
    for hook in _hook_calls(target, operation, stage):
        if exc is None:
            result = hook(target, *args, **kwargs)
        else:
            result = hook(target, exc, *args, **kwargs)
        if inspect.isawaitable(result):
            await result


def _build_wrapper(operation: str, original: Callable) -> Callable:
    if inspect.iscoroutinefunction(original):

        @functools.wraps(original)
        async def async_wrapper(self, *args, **kwargs):
            if _is_shadowed(self, operation, async_wrapper):
                return await original(self, *args, **kwargs)

            await _run_hooks_async(self, operation, HookStage.BEFORE, args, kwargs)
            try:
                result = await original(self, *args, **kwargs)
            except Exception as exc:
                await _run_hooks_async(self, operation, HookStage.ERROR, args, kwargs, exc=exc)
                raise
            await _run_hooks_async(self, operation, HookStage.AFTER, args, kwargs)
            return result

        wrapper = async_wrapper
    else:

        @functools.wraps(original)
        def sync_wrapper(self, *args, **kwargs):
            if _is_shadowed(self, operation, sync_wrapper):
                return original(self, *args, **kwargs)

            _run_hooks(self, operation, HookStage.BEFORE, args, kwargs)
            try:
                result = original(self, *args, **kwargs)
            except Exception as exc:
                _run_hooks(self, operation, HookStage.ERROR, args, kwargs, exc=exc)
                raise
            _run_hooks(self, operation, HookStage.AFTER, args, kwargs)
            return result

        wrapper = sync_wrapper

    setattr(wrapper, WRAPPER_MARKER, operation)
    return wrapper


def ensure_wrapped(cls: type, operation: str) -> Callable:
    """
    Make an operation hook-aware on cls, exactly once

    The first call replaces cls.<operation> with a dispatching wrapper (the
    original stays reachable as wrapper.__wrapped__) and records the wrap
    marker in the type registry. Later calls return without wrapping again.

    Args:
        cls: Class to install the wrapper on
        operation: Method name

    Returns:
        The class attribute currently bound to the operation

    Raises:
        UnknownOperationError: If the operation does not exist on cls
        ScopeUnavailableError: If cls does not accept new attributes
    """
    registry = get_type_registry(cls)
    with registry_lock():
        if registry.is_wrapped(operation):
            return _resolve_static(cls, operation)

        original = find_operation(cls, operation)
        wrapper = _build_wrapper(operation, original)
        setattr(cls, operation, wrapper)
        registry.mark_wrapped(operation)

    logger.debug(
        f"Installed hook wrapper on {cls.__qualname__}.{operation} "
        f"(original: {callable_name(original)})"
    )
    return wrapper


__all__ = [
    "WRAPPER_MARKER",
    "find_operation",
    "is_coroutine_operation",
    "is_hook_wrapper",
    "ensure_wrapped",
]
