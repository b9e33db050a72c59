"""
Public hook registration API

Two entry points share the same validation and registration path:

    class Foo(MethodHooks):
        def foobar(self):
            ...

    Foo.hook("before", "foobar", announce)    # every Foo
    foo = Foo()
    foo.hook("after", "foobar", audit)        # only this foo

    # Without the mixin
    add_hook(Bar, "error", "save", report_failure)

Called without a callee, hook()/add_hook() return a decorator:

    @Foo.hook("before", "foobar")
    def announce(foo):
        print(f"hooked {foo} before foobar!")

Hooks are added by replacing the hooked method on the class, so they are not
run if the method is redefined afterwards, and a method must already exist
to be hooked.
"""

import inspect
from typing import Any, Callable, List, Optional

from methodhooks.core.exceptions import (
    ConflictingHookSpecificationError,
    IncompatibleHookError,
    NotCallableError,
)
from methodhooks.core.interceptor import ensure_wrapped, find_operation
from methodhooks.core.registry import (
    coerce_stage,
    get_instance_registry,
    get_type_registry,
    registry_lock,
    validate_stage,
)
from methodhooks.core.types import HookCallable, HookStage, Target
from methodhooks.core.utils.helpers import callable_name


def _owner_of(target: Target) -> type:
    return target if isinstance(target, type) else type(target)


def _is_coroutine_callable(hook: Any) -> bool:
    if inspect.iscoroutinefunction(hook):
        return True
    call = getattr(hook, "__call__", None)
    return inspect.iscoroutinefunction(call)


def _check_target(target: Target, stage: Any, operation: str) -> HookStage:
    stage = validate_stage(stage)
    find_operation(_owner_of(target), operation)
    return stage


def register_hook(target: Target, stage: Any, operation: str, hook: HookCallable) -> None:
    """
    Validate and register a single hook

    Nothing is registered when any check fails.

    Args:
        target: Class (type scope) or instance (instance scope)
        stage: before, after or error
        operation: Name of an instance method already defined on the class
        hook: Callable to run at that stage

    Raises:
        InvalidStageError: Unknown or reserved stage
        UnknownOperationError: No such instance method
        NotCallableError: hook is not callable
        IncompatibleHookError: Coroutine hook on a synchronous operation
        ScopeUnavailableError: Target cannot own a scope
    """
    stage = validate_stage(stage)
    owner = _owner_of(target)
    original = find_operation(owner, operation)

    if not callable(hook):
        raise NotCallableError(hook)
    if _is_coroutine_callable(hook) and not inspect.iscoroutinefunction(original):
        raise IncompatibleHookError(
            f"coroutine hook {callable_name(hook)} cannot run on synchronous "
            f"operation {owner.__qualname__}.{operation}"
        )

    with registry_lock():
        if isinstance(target, type):
            registry = get_type_registry(target)
        else:
            registry = get_instance_registry(target)
        ensure_wrapped(owner, operation)
        registry.register(operation, stage, hook)


def add_hook(
    target: Target,
    stage: Any,
    operation: str,
    callee: Optional[HookCallable] = None,
    *,
    body: Optional[HookCallable] = None,
) -> Any:
    """
    Hook the given stage of an operation on a class or a single instance

    Can be called directly:
        add_hook(Foo, "before", "foobar", my_hook)

    Or used as a decorator:
        @add_hook(foo, "after", "foobar")
        def my_hook(target, *args, **kwargs):
            ...

    Args:
        target: Class (hooks every instance) or instance (hooks only that object)
        stage: before, after or error (around is reserved)
        operation: Name of the method to hook, must already be defined
        callee: Hook callable
        body: Inline hook body, alternative to callee

    Returns:
        target when a hook was given (for chaining), otherwise a decorator
        that registers the decorated function and returns it unchanged

    Raises:
        ConflictingHookSpecificationError: Both callee and body were given
        See register_hook for the remaining errors
    """
    if callee is not None and body is not None:
        raise ConflictingHookSpecificationError(
            f"hook: {callable_name(callee)} _and_ body given!"
        )

    hook = callee if callee is not None else body
    if hook is None:
        # Fail fast on stage/operation, before anything is decorated
        _check_target(target, stage, operation)

        def decorator(func: HookCallable) -> HookCallable:
            register_hook(target, stage, operation, func)
            return func

        return decorator

    register_hook(target, stage, operation, hook)
    return target


def get_hooks(target: Target, operation: str, stage: Any) -> List[HookCallable]:
    """
    Get the hooks registered directly on one scope

    Hooks of other scopes (a class's hooks when given an instance, base class
    hooks when given a subclass) are not included.

    Args:
        target: Class or instance
        operation: Operation name
        stage: Any known stage, reserved ones included

    Returns:
        Ordered list of hooks, empty when none
    """
    stage = coerce_stage(stage)
    if isinstance(target, type):
        registry = get_type_registry(target, create=False)
    else:
        registry = get_instance_registry(target, create=False)
    if registry is None:
        return []
    return registry.hooks_for(operation, stage)


class _ScopedHook:
    """
    Descriptor behind MethodHooks.hook

    Accessed on the class it registers in the type scope, accessed on an
    instance it registers in that instance's scope.
    """

    def __get__(self, instance: Any, owner: type) -> Callable[..., Any]:
        target = owner if instance is None else instance

        def hook(
            stage: Any,
            operation: str,
            callee: Optional[HookCallable] = None,
            *,
            body: Optional[HookCallable] = None,
        ) -> Any:
            return add_hook(target, stage, operation, callee, body=body)

        hook.__doc__ = add_hook.__doc__
        return hook


class MethodHooks:
    """
    Mixin giving a class, and each of its instances, a hook() method

    Subclassing creates the subclass's type scope immediately; instance
    scopes are created on the first instance-level registration.

    Example:
        class System(MethodHooks):
            def boot(self):
                ...

        System.hook("before", "boot", load_plugins)
        system = System()
        system.hook("error", "boot", lambda s, exc: report(exc))
    """

    hook = _ScopedHook()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        get_type_registry(cls)


__all__ = [
    "MethodHooks",
    "add_hook",
    "get_hooks",
    "register_hook",
]
