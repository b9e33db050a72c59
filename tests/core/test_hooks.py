"""
Test the public registration API

- MethodHooks.hook on classes and instances
- add_hook / get_hooks for classes without the mixin
- decorator form
- registration errors
"""
import copy

import pytest

from methodhooks import (
    ConflictingHookSpecificationError,
    HookStage,
    IncompatibleHookError,
    InvalidStageError,
    MethodHooks,
    MethodHooksError,
    NotCallableError,
    ScopeUnavailableError,
    UnknownOperationError,
    add_hook,
    get_hooks,
)
from methodhooks.core.interceptor import is_hook_wrapper
from methodhooks.core.registry import REGISTRY_ATTR


class TestMixinHook:
    """Test MethodHooks.hook"""

    def test_class_hook_returns_class(self, greeter_class):
        result = greeter_class.hook("before", "greet", lambda g, name: None)
        assert result is greeter_class

    def test_instance_hook_returns_instance(self, greeter_class):
        greeter = greeter_class()
        result = greeter.hook("before", "greet", lambda g, name: None)
        assert result is greeter

    def test_chaining(self, greeter_class, call_log):
        (
            greeter_class
            .hook("before", "greet", lambda g, name: call_log.append("one"))
            .hook("after", "greet", lambda g, name: call_log.append("two"))
        )

        greeter_class().greet("ann")
        assert call_log == ["one", "greet", "two"]

    def test_stage_enum_accepted(self, greeter_class):
        hook = lambda g, name: None  # noqa: E731
        greeter_class.hook(HookStage.AFTER, "greet", hook)
        assert get_hooks(greeter_class, "greet", "after") == [hook]

    def test_body_keyword(self, greeter_class, call_log):
        greeter_class.hook("before", "greet", body=lambda g, name: call_log.append(name))

        greeter_class().greet("ann")
        assert call_log == ["ann", "greet"]

    def test_decorator_form(self, greeter_class, call_log):
        @greeter_class.hook("before", "greet")
        def announce(greeter, name):
            call_log.append(f"announce {name}")

        assert callable(announce)
        assert announce.__name__ == "announce"

        greeter_class().greet("ann")
        assert call_log == ["announce ann", "greet"]

    def test_instance_decorator_form(self, greeter_class, call_log):
        greeter = greeter_class()

        @greeter.hook("after", "greet")
        def audit(target, name):
            call_log.append(target is greeter)

        greeter.greet("ann")
        greeter_class().greet("bob")
        assert call_log == ["greet", True, "greet"]

    def test_subclassing_creates_type_scope(self):
        class Plugin(MethodHooks):
            pass

        assert REGISTRY_ATTR in Plugin.__dict__

    def test_instance_scope_created_lazily(self, greeter_class):
        greeter = greeter_class()
        assert REGISTRY_ATTR not in vars(greeter)

        greeter.hook("before", "greet", lambda g, name: None)
        assert REGISTRY_ATTR in vars(greeter)

    def test_instance_isolation(self, greeter_class, call_log):
        first, second = greeter_class(), greeter_class()
        first.hook("before", "greet", lambda g, name: call_log.append("first only"))

        second.greet("bob")
        first.greet("ann")
        assert call_log == ["greet", "first only", "greet"]

    @pytest.mark.parametrize("duplicate", [copy.copy, copy.deepcopy])
    def test_copied_instance_keeps_hooks_to_itself(self, greeter_class, call_log, duplicate):
        original = greeter_class()
        original.hook("before", "greet", lambda g, name: call_log.append("orig"))

        clone = duplicate(original)
        clone.hook("before", "greet", lambda g, name: call_log.append("clone-only"))

        original.greet("ann")
        assert call_log == ["orig", "greet"]

        call_log.clear()
        clone.greet("bob")
        assert call_log == ["orig", "clone-only", "greet"]

        call_log.clear()
        original.hook("after", "greet", lambda g, name: call_log.append("orig-after"))
        clone.greet("bob")
        assert call_log == ["orig", "clone-only", "greet"]

    def test_hook_added_on_copy_does_not_reach_original(self, greeter_class, call_log):
        original = greeter_class()
        original.hook("before", "greet", lambda g, name: None)
        clone = copy.copy(original)

        clone.hook("after", "greet", lambda g, name: call_log.append("clone"))

        original.greet("ann")
        assert call_log == ["greet"]


class TestAddHook:
    """Test add_hook/get_hooks on classes without the mixin"""

    def test_type_scope(self, plain_class, call_log):
        add_hook(plain_class, "before", "save", lambda s, record, force=False: call_log.append("before"))

        assert plain_class().save("r1", force=True) == {"saved": "r1", "force": True}
        assert call_log == ["before", ("save", "r1", True)]

    def test_instance_scope(self, plain_class, call_log):
        service, other = plain_class(), plain_class()
        add_hook(service, "after", "save", lambda s, record, force=False: call_log.append("after"))

        other.save("r1")
        service.save("r2")
        assert call_log == [("save", "r1", False), ("save", "r2", False), "after"]

    def test_returns_target(self, plain_class):
        service = plain_class()
        assert add_hook(plain_class, "before", "save", print) is plain_class
        assert add_hook(service, "before", "save", print) is service

    def test_decorator(self, plain_class, call_log):
        @add_hook(plain_class, "error", "save")
        def report(service, exc, record, force=False):
            call_log.append(exc)

        assert get_hooks(plain_class, "save", "error") == [report]

    def test_get_hooks_is_per_scope(self, plain_class):
        service = plain_class()

        def type_hook(s, record, force=False):
            pass

        def instance_hook(s, record, force=False):
            pass

        add_hook(plain_class, "before", "save", type_hook)
        add_hook(service, "before", "save", instance_hook)

        assert get_hooks(plain_class, "save", "before") == [type_hook]
        assert get_hooks(service, "save", "before") == [instance_hook]
        assert get_hooks(plain_class(), "save", "before") == []
        assert get_hooks(plain_class, "save", "around") == []

    def test_get_hooks_rejects_unknown_stage(self, plain_class):
        with pytest.raises(InvalidStageError):
            get_hooks(plain_class, "save", "later")


class TestRegistrationErrors:
    """Test registration validation; failures register nothing"""

    def assert_untouched(self, cls, operation):
        assert not is_hook_wrapper(cls.__dict__.get(operation))
        for stage in ("before", "after", "error"):
            assert get_hooks(cls, operation, stage) == []

    def test_invalid_stage(self, greeter_class):
        with pytest.raises(InvalidStageError):
            greeter_class.hook("beforehand", "greet", print)
        self.assert_untouched(greeter_class, "greet")

    def test_around_is_reserved(self, greeter_class):
        with pytest.raises(InvalidStageError, match="reserved"):
            greeter_class.hook("around", "greet", print)
        with pytest.raises(InvalidStageError, match="reserved"):
            greeter_class.hook(HookStage.AROUND, "greet")
        self.assert_untouched(greeter_class, "greet")

    def test_unknown_operation(self, greeter_class):
        with pytest.raises(UnknownOperationError):
            greeter_class.hook("before", "wave", print)

        assert "wave" not in greeter_class.__dict__
        assert get_hooks(greeter_class, "wave", "before") == []

    def test_unknown_operation_on_instance(self, greeter_class):
        greeter = greeter_class()
        with pytest.raises(UnknownOperationError):
            greeter.hook("before", "wave", print)
        assert REGISTRY_ATTR not in vars(greeter)

    def test_operation_defined_later_is_unknown(self, greeter_class):
        with pytest.raises(UnknownOperationError):
            greeter_class.hook("before", "farewell", print)

        greeter_class.farewell = lambda self: "bye"
        greeter_class.hook("before", "farewell", lambda g: None)
        assert greeter_class().farewell() == "bye"

    def test_decorator_form_fails_fast(self, greeter_class):
        with pytest.raises(UnknownOperationError):
            greeter_class.hook("before", "wave")

    def test_callee_and_body_conflict(self, greeter_class):
        with pytest.raises(ConflictingHookSpecificationError):
            greeter_class.hook("before", "greet", print, body=print)
        self.assert_untouched(greeter_class, "greet")

    def test_not_callable(self, greeter_class):
        with pytest.raises(NotCallableError):
            greeter_class.hook("before", "greet", "print")
        self.assert_untouched(greeter_class, "greet")

    def test_coroutine_hook_on_sync_operation(self, greeter_class):
        async def notify(greeter, name):
            pass

        with pytest.raises(IncompatibleHookError):
            greeter_class.hook("after", "greet", notify)
        self.assert_untouched(greeter_class, "greet")

    def test_instance_without_dict(self, call_log):
        class Slotted:
            __slots__ = ()

            def ping(self):
                return "pong"

        with pytest.raises(ScopeUnavailableError):
            add_hook(Slotted(), "before", "ping", print)

        # The type scope still works for slotted classes
        add_hook(Slotted, "before", "ping", lambda s: call_log.append("ping"))
        assert Slotted().ping() == "pong"
        assert call_log == ["ping"]

    @pytest.mark.parametrize(
        "error_class, builtin",
        [
            (InvalidStageError, ValueError),
            (UnknownOperationError, AttributeError),
            (ConflictingHookSpecificationError, ValueError),
            (NotCallableError, TypeError),
            (IncompatibleHookError, TypeError),
            (ScopeUnavailableError, TypeError),
        ],
    )
    def test_error_hierarchy(self, error_class, builtin):
        assert issubclass(error_class, MethodHooksError)
        assert issubclass(error_class, builtin)
