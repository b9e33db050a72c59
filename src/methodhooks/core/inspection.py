"""
Read-only views of registered hooks

Used by the CLI and handy in tests or REPL sessions to see what a class or
object will run around its operations.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from methodhooks.core.registry import HookRegistry, get_type_registry, resolve_scope_chain
from methodhooks.core.types import HookStage, Target
from methodhooks.core.utils.helpers import callable_name

_STAGE_ORDER = (HookStage.BEFORE, HookStage.AFTER, HookStage.ERROR)


@dataclass(frozen=True)
class HookInfo:
    """One registered hook, as seen from a particular target"""

    operation: str
    stage: str
    scope: str
    owner: str
    position: int
    hook_name: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _scopes_for(target: Target) -> List[HookRegistry]:
    if isinstance(target, type):
        return [
            registry for registry in (
                get_type_registry(klass, create=False) for klass in target.__mro__
            )
            if registry is not None
        ]
    return resolve_scope_chain(target)


def describe_hooks(target: Target) -> List[HookInfo]:
    """
    List every hook that applies to target, in dispatch order

    For an instance this covers its own scope, its class and its base
    classes; for a class, the class and its base classes. Entries are grouped
    by operation (sorted by name), then stage (before, after, error), then
    scope order, then registration order.

    Args:
        target: Class or instance

    Returns:
        List of HookInfo
    """
    scopes = _scopes_for(target)
    operations = sorted({name for registry in scopes for name in registry.operations()})

    infos: List[HookInfo] = []
    for operation in operations:
        for stage in _STAGE_ORDER:
            for registry in scopes:
                for position, hook in enumerate(registry.hooks_for(operation, stage)):
                    infos.append(
                        HookInfo(
                            operation=operation,
                            stage=stage.value,
                            scope=registry.kind.value,
                            owner=registry.owner_name,
                            position=position,
                            hook_name=callable_name(hook),
                        )
                    )
    return infos


def wrapped_operations(cls: type) -> List[str]:
    """
    Operations that have a hook wrapper installed directly on cls

    Args:
        cls: Class to inspect

    Returns:
        Sorted operation names
    """
    registry = get_type_registry(cls, create=False)
    if registry is None:
        return []
    return registry.wrapped_operations()


__all__ = ["HookInfo", "describe_hooks", "wrapped_operations"]
