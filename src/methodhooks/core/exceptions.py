"""
Exceptions raised by methodhooks

Every registration failure derives from MethodHooksError and from the builtin
exception a caller would naturally catch for that kind of mistake. Failures
raised by hooked operations or by hooks themselves are never wrapped.
"""


class MethodHooksError(Exception):
    """Base class for all methodhooks errors"""


class InvalidStageError(MethodHooksError, ValueError):
    """Registration requested a stage outside before/after/error"""

    def __init__(self, stage: object, reserved: bool = False):
        self.stage = stage
        if reserved:
            message = f"hook stage '{stage}' is reserved and cannot be registered"
        else:
            message = f"invalid hook stage: {stage!r}"
        super().__init__(message)


class UnknownOperationError(MethodHooksError, AttributeError):
    """The hooked operation is not an instance method of the class"""

    def __init__(self, owner: type, operation: str, reason: str = "no such method"):
        self.owner = owner
        self.operation = operation
        super().__init__(f"cannot hook {owner.__qualname__}.{operation}: {reason}")


class ConflictingHookSpecificationError(MethodHooksError, ValueError):
    """Both a callee and an inline body were given to a single registration"""


class NotCallableError(MethodHooksError, TypeError):
    """The supplied hook does not support being called"""

    def __init__(self, hook: object):
        self.hook = hook
        super().__init__(f"hook {hook!r} is not callable")


class IncompatibleHookError(MethodHooksError, TypeError):
    """A coroutine hook was registered on a synchronous operation"""


class ScopeUnavailableError(MethodHooksError, TypeError):
    """The object cannot own an instance scope (no __dict__)"""


__all__ = [
    "MethodHooksError",
    "InvalidStageError",
    "UnknownOperationError",
    "ConflictingHookSpecificationError",
    "NotCallableError",
    "IncompatibleHookError",
    "ScopeUnavailableError",
]
