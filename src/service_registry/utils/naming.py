"""Helpers for naming types and instances in keys and error messages."""

from typing import Any


def type_name(obj_or_type: Any) -> str:
    """Return the fully-qualified class name of a type or of an instance's type.

    Builtins are returned without the ``builtins.`` prefix.

    Args:
        obj_or_type: A class, or an instance whose class should be named

    Returns:
        The dotted ``module.QualName`` of the class
    """
    cls = obj_or_type if isinstance(obj_or_type, type) else type(obj_or_type)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def object_id(obj: Any) -> str:
    """Return a readable identity label, e.g. ``pkg.Mailer:0x7f3a...``.

    Two distinct instances never share a label while both are alive.
    """
    return f"{type_name(obj)}:{id(obj):#x}"
