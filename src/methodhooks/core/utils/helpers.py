"""
Helper functions shared by the core and the CLI
"""

import importlib
from typing import Any


def callable_name(obj: Any) -> str:
    """
    Human readable name for a hook or operation

    Args:
        obj: Any callable

    Returns:
        Qualified name when the object has one, repr otherwise
    """
    name = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None)
    if name:
        return name
    return repr(obj)


def import_object(reference: str) -> Any:
    """
    Import an object from a "package.module:attribute" reference

    Nested attributes are separated by dots after the colon, e.g.
    "myapp.plugins:System.default".

    Args:
        reference: Import reference

    Returns:
        The referenced object

    Raises:
        ValueError: If the reference is not of the form module:attribute
        ImportError: If the module cannot be imported
        AttributeError: If the attribute does not exist
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(
            f"Invalid reference '{reference}'. Expected 'package.module:attribute'"
        )

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


__all__ = ["callable_name", "import_object"]
