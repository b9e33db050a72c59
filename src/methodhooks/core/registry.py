"""
Hook registry and scope resolution

Each scope owns one HookRegistry:
- Type scope: stored in the class __dict__, shared by every instance
- Instance scope: stored in the instance __dict__, created on first use and
  owned by exactly one object (copies of the object get their own)

Registries are never looked up through normal attribute access, so a subclass
never sees its base class registry as its own. Dispatch walks the MRO
explicitly instead (see resolve_scope_chain).
"""

import threading
from typing import Any, Dict, List, Optional

from methodhooks.core.exceptions import InvalidStageError, ScopeUnavailableError
from methodhooks.core.types import ACTIVE_STAGES, HookCallable, HookStage, ScopeKind
from methodhooks.core.utils.logger import get_logger

logger = get_logger(__name__)

REGISTRY_ATTR = "__methodhooks__"

# Guards registry creation and mutation. Reentrant because registration
# creates scopes and marks wrappers while already holding it.
_lock = threading.RLock()


def coerce_stage(stage: Any) -> HookStage:
    """
    Convert a stage name to a HookStage

    Args:
        stage: HookStage member or its string value

    Returns:
        HookStage member

    Raises:
        InvalidStageError: If stage names no known stage
    """
    try:
        return HookStage.coerce(stage)
    except ValueError:
        raise InvalidStageError(stage) from None


def validate_stage(stage: Any) -> HookStage:
    """
    Convert a stage name to a HookStage that accepts registrations

    Raises:
        InvalidStageError: If stage is unknown or reserved (around)
    """
    value = coerce_stage(stage)
    if value not in ACTIVE_STAGES:
        raise InvalidStageError(value.value, reserved=True)
    return value


class HookRegistry:
    """
    Hook storage for one scope

    Maps operation name -> stage -> ordered list of hooks. Lists are
    append-only; hooks run in the order they were registered.

    The registry of a type scope also carries the wrap markers for the
    operations wrapped on that type.
    """

    def __init__(self, kind: ScopeKind, owner_name: str, owner_id: Optional[int] = None):
        self.kind = kind
        self.owner_name = owner_name
        self.owner_id = owner_id
        self._hooks: Dict[str, Dict[HookStage, List[HookCallable]]] = {}
        self._wrapped: set = set()

    def __repr__(self) -> str:
        return f"<HookRegistry {self.kind.value} {self.owner_name} operations={sorted(self._hooks)}>"

    def _stages_for(self, operation: str) -> Dict[HookStage, List[HookCallable]]:
        stages = self._hooks.get(operation)
        if stages is None:
            stages = {stage: [] for stage in HookStage}
            self._hooks[operation] = stages
        return stages

    def register(self, operation: str, stage: Any, hook: HookCallable) -> None:
        """
        Append a hook for (operation, stage)

        Args:
            operation: Operation name
            stage: before, after or error
            hook: Callable to run

        Raises:
            InvalidStageError: If stage is unknown or reserved
        """
        stage = validate_stage(stage)
        with _lock:
            self._stages_for(operation)[stage].append(hook)
        logger.debug(
            f"Registered {stage.value} hook on {self.kind.value} scope "
            f"{self.owner_name}.{operation}"
        )

    def hooks_for(self, operation: str, stage: Any) -> List[HookCallable]:
        """
        Get the hooks registered for (operation, stage)

        Args:
            operation: Operation name
            stage: Any known stage, reserved ones included

        Returns:
            A copy of the ordered hook list, empty when nothing is registered
        """
        stage = coerce_stage(stage)
        stages = self._hooks.get(operation)
        if stages is None:
            return []
        with _lock:
            return list(stages[stage])

    def operations(self) -> List[str]:
        """Names of operations with at least one registered hook, sorted"""
        with _lock:
            return sorted(
                name for name, stages in self._hooks.items()
                if any(stages.values())
            )

    def is_wrapped(self, operation: str) -> bool:
        return operation in self._wrapped

    def mark_wrapped(self, operation: str) -> None:
        with _lock:
            self._wrapped.add(operation)

    def wrapped_operations(self) -> List[str]:
        with _lock:
            return sorted(self._wrapped)

    def fork(self, owner_id: Optional[int] = None) -> "HookRegistry":
        """
        Independent registry holding the same hooks, for a copied owner

        Hook lists are copied, so registrations on either side stay local.
        """
        forked = HookRegistry(self.kind, self.owner_name, owner_id)
        with _lock:
            forked._hooks = {
                operation: {stage: list(hooks) for stage, hooks in stages.items()}
                for operation, stages in self._hooks.items()
            }
            forked._wrapped = set(self._wrapped)
        return forked


def get_type_registry(cls: type, create: bool = True) -> Optional[HookRegistry]:
    """
    Get the type scope registry of a class

    Args:
        cls: Class owning the scope
        create: Create the registry when the class has none yet

    Returns:
        HookRegistry, or None if absent and create is False

    Raises:
        ScopeUnavailableError: If the class does not accept new attributes
    """
    registry = cls.__dict__.get(REGISTRY_ATTR)
    if registry is not None or not create:
        return registry

    with _lock:
        registry = cls.__dict__.get(REGISTRY_ATTR)
        if registry is None:
            registry = HookRegistry(ScopeKind.TYPE, cls.__qualname__)
            try:
                setattr(cls, REGISTRY_ATTR, registry)
            except TypeError as e:
                raise ScopeUnavailableError(
                    f"cannot attach hooks to {cls.__qualname__}: {e}"
                ) from e
            logger.debug(f"Created type scope for {cls.__qualname__}")
    return registry


def get_instance_registry(obj: Any, create: bool = True) -> Optional[HookRegistry]:
    """
    Get the instance scope registry of an object

    The registry is kept in the object's __dict__, written directly so a
    custom __setattr__ (frozen dataclasses, pydantic models) is bypassed.

    copy.copy and copy.deepcopy carry the registry over to the new object's
    __dict__. A registry found there that belongs to another object is
    replaced by a fork, so the copy starts with the hooks the original had
    and both sides register independently from then on.

    Args:
        obj: Object owning the scope
        create: Create the registry when the object has none yet

    Returns:
        HookRegistry, or None if absent and create is False

    Raises:
        ScopeUnavailableError: If create is True and the object has no __dict__
    """
    try:
        namespace = vars(obj)
    except TypeError:
        if not create:
            return None
        raise ScopeUnavailableError(
            f"{type(obj).__qualname__} instances have no __dict__ and cannot own instance hooks"
        ) from None

    owner_id = id(obj)
    registry = namespace.get(REGISTRY_ATTR)
    if registry is not None and registry.owner_id == owner_id:
        return registry
    if registry is None and not create:
        return None

    with _lock:
        registry = namespace.get(REGISTRY_ATTR)
        if registry is None:
            registry = HookRegistry(ScopeKind.INSTANCE, type(obj).__qualname__, owner_id)
            namespace[REGISTRY_ATTR] = registry
            logger.debug(f"Created instance scope for {type(obj).__qualname__} at {owner_id:#x}")
        elif registry.owner_id != owner_id:
            registry = registry.fork(owner_id)
            namespace[REGISTRY_ATTR] = registry
            logger.debug(f"Forked instance scope for copied {type(obj).__qualname__} at {owner_id:#x}")
    return registry


def resolve_scope_chain(target: Any) -> List[HookRegistry]:
    """
    Registries consulted when an operation is called on target, in dispatch order

    Order: the instance scope (if any), then the type scope of type(target),
    then the type scopes of its base classes in MRO order. Classes without a
    registry are skipped; nothing is created.

    Args:
        target: The object the operation is called on

    Returns:
        List of HookRegistry
    """
    chain: List[HookRegistry] = []
    instance_registry = get_instance_registry(target, create=False)
    if instance_registry is not None:
        chain.append(instance_registry)
    for klass in type(target).__mro__:
        registry = klass.__dict__.get(REGISTRY_ATTR)
        if registry is not None:
            chain.append(registry)
    return chain


def registry_lock() -> threading.RLock:
    """The lock guarding registry mutation, for callers composing several steps"""
    return _lock


__all__ = [
    "HookRegistry",
    "REGISTRY_ATTR",
    "coerce_stage",
    "validate_stage",
    "get_type_registry",
    "get_instance_registry",
    "resolve_scope_chain",
    "registry_lock",
]
