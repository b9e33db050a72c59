"""
Core type definitions for methodhooks

Hook stages and the callable shapes hooks are expected to have. Kept in a
module of their own so the registry, the interceptor and the public API can
share them without importing each other.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, FrozenSet, Union


# ============================================================================
# Hook stages
# ============================================================================

class HookStage(str, Enum):
    """
    Lifecycle points a hook can fire at

    BEFORE, AFTER and ERROR are registrable. AROUND is part of the vocabulary
    but reserved: registering it is rejected.
    """
    BEFORE = "before"
    """Runs before the operation, receives (target, *args, **kwargs)"""

    AFTER = "after"
    """Runs after the operation returned, receives (target, *args, **kwargs)"""

    ERROR = "error"
    """Runs when the operation raised, receives (target, exc, *args, **kwargs)"""

    AROUND = "around"
    """Reserved"""

    @classmethod
    def coerce(cls, value: Union["HookStage", str]) -> "HookStage":
        """
        Convert a stage name to a HookStage

        Args:
            value: HookStage member or its string value

        Returns:
            HookStage member

        Raises:
            ValueError: If value names no stage
        """
        if isinstance(value, cls):
            return value
        return cls(value)


VALID_STAGES: FrozenSet[HookStage] = frozenset(HookStage)
"""Every stage name known to methodhooks, reserved ones included"""

ACTIVE_STAGES: FrozenSet[HookStage] = frozenset(
    {HookStage.BEFORE, HookStage.AFTER, HookStage.ERROR}
)
"""Stages that accept registrations and are dispatched"""


class ScopeKind(str, Enum):
    """Owner kind of a hook registry"""
    TYPE = "type"
    INSTANCE = "instance"


# ============================================================================
# Type Aliases
# ============================================================================

HookCallable = Callable[..., Union[None, Awaitable[None]]]
"""
Type alias for hook functions.

before/after hooks are called as hook(target, *args, **kwargs), error hooks as
hook(target, exc, *args, **kwargs). Return values are ignored; coroutine hooks
are only accepted on coroutine operations.

Example:
    def audit(target: Any, *args: Any, **kwargs: Any) -> None:
        logger.info(f"{target!r} called with {args} {kwargs}")
"""

Target = Any
"""A class (type scope) or an instance (instance scope)"""


__all__ = [
    "HookStage",
    "VALID_STAGES",
    "ACTIVE_STAGES",
    "ScopeKind",
    "HookCallable",
    "Target",
]
