"""
Method visibility.

Python has no enforced visibility, so a method's visibility comes from an
explicit marker when one was applied with the ``public``, ``protected`` or
``private`` decorators, and from naming convention otherwise.
"""

from enum import Enum
from typing import Any, Optional


VISIBILITY_MARKER = "_methodref_visibility"


class Visibility(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


def _mark(func: Any, visibility: Visibility) -> Any:
    # staticmethod/classmethod wrappers carry the marker on the function
    inner = getattr(func, "__func__", func)
    setattr(inner, VISIBILITY_MARKER, visibility)
    return func


def public(func):
    """Declare a method public regardless of its name."""
    return _mark(func, Visibility.PUBLIC)


def protected(func):
    """Declare a method protected regardless of its name."""
    return _mark(func, Visibility.PROTECTED)


def private(func):
    """Declare a method private regardless of its name."""
    return _mark(func, Visibility.PRIVATE)


def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_private_name(name: str) -> bool:
    """True for names Python mangles inside a class body (``__name``)."""
    return name.startswith("__") and not name.endswith("__")


def mangle(name: str, owner: Any) -> str:
    """
    Return the attribute name Python stores a private name under.

    Non-private names and owners that are not classes are returned
    unchanged.
    """
    if not is_private_name(name) or not isinstance(owner, type):
        return name
    stripped = owner.__name__.lstrip("_")
    if not stripped:
        return name
    return f"_{stripped}{name}"


def marked_visibility(raw: Any) -> Optional[Visibility]:
    """Visibility set by one of the decorators, if any."""
    inner = getattr(raw, "__func__", raw)
    marker = getattr(inner, VISIBILITY_MARKER, None)
    if isinstance(marker, Visibility):
        return marker
    return None


def convention_visibility(attr_name: str, owner: Any = None) -> Visibility:
    """
    Visibility implied by an attribute name.

    Args:
        attr_name: Name as stored in the namespace (possibly mangled)
        owner: Class whose namespace holds the attribute, used to
            recognise mangled private names

    Returns:
        PUBLIC for dunders and plain names, PRIVATE for ``__name`` and its
        mangled ``_Owner__name`` form, PROTECTED for other ``_name``
    """
    if is_dunder(attr_name):
        return Visibility.PUBLIC
    if is_private_name(attr_name):
        return Visibility.PRIVATE
    if isinstance(owner, type):
        for klass in getattr(owner, "__mro__", ()):
            stripped = klass.__name__.lstrip("_")
            prefix = f"_{stripped}__"
            if stripped and attr_name.startswith(prefix) and len(attr_name) > len(prefix):
                return Visibility.PRIVATE
    if attr_name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def declared_visibility(attr_name: str, raw: Any, owner: Any = None) -> Visibility:
    """Visibility of a declared method: explicit marker first, then naming."""
    marked = marked_visibility(raw)
    if marked is not None:
        return marked
    return convention_visibility(attr_name, owner)
