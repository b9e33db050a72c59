"""
Test configuration and fixtures for methodhooks
"""
import os
import sys

import pytest

# Add src directory to path for development checkouts
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from methodhooks import MethodHooks, clear_config  # noqa: E402
from methodhooks.core.utils.logger import get_logger  # noqa: E402

logger = get_logger(__name__)


# Custom pytest markers
def pytest_configure(config):
    """Configure custom pytest markers"""
    config.addinivalue_line("markers", "slow: mark test as slow")


@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts and ends with default configuration"""
    clear_config()
    yield
    clear_config()


@pytest.fixture
def call_log():
    """Shared list hooks and operations append to, to check call order"""
    return []


@pytest.fixture
def greeter_class(call_log):
    """
    A fresh hookable class per test

    Defined inside the fixture so hooks and wrappers never leak between tests.
    """

    class Greeter(MethodHooks):
        def greet(self, name):
            call_log.append("greet")
            return "hi " + name

        def some_hookpoint(self, *args, **kwargs):
            callback = kwargs.pop("callback", None)
            return [args, kwargs, callback(self, args, kwargs) if callback else None]

        def fail(self, message):
            call_log.append("fail")
            raise RuntimeError(message)

    return Greeter


@pytest.fixture
def plain_class(call_log):
    """A fresh class that does not use the MethodHooks mixin"""

    class Service:
        def save(self, record, *, force=False):
            call_log.append(("save", record, force))
            return {"saved": record, "force": force}

    return Service
