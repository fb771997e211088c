"""
Visibility resolution across method tables.

Pure functions; both method reference variants share
``visibility_across_tables`` and differ only in the table they pass in.
"""

import inspect
import types
from typing import Any, Optional, Tuple

from .method_table import MethodTable
from .visibility import Visibility


_MISSING = object()
_SLOT_DESCRIPTORS = (types.MemberDescriptorType, types.GetSetDescriptorType)

# Checked in this order; first match wins
TABLE_ORDER: Tuple[Visibility, ...] = (
    Visibility.PUBLIC,
    Visibility.PRIVATE,
    Visibility.PROTECTED,
)


def visibility_across_tables(table: MethodTable, name: str) -> Optional[Visibility]:
    """
    Visibility of ``name`` in ``table``.

    Returns:
        The first visibility whose table declares the name, or None when
        no table does
    """
    for visibility in TABLE_ORDER:
        if table.method_defined(name, visibility):
            return visibility
    return None


def method_defined_at_any_visibility(table: MethodTable, name: str) -> bool:
    return visibility_across_tables(table, name) is not None


def instance_method_visibility_for(klass: Any, name: str) -> Optional[Visibility]:
    return visibility_across_tables(MethodTable.for_class(klass), name)


def responds_to(obj: Any, name: str, include_all: bool = True) -> bool:
    """
    Whether calling ``obj.<name>`` would find something callable.

    Declared methods answer from the method table. Names found by static
    lookup (properties, plain data) answer from what is stored there, so no
    getter ever runs. Only names absent everywhere are probed with
    ``getattr``, which runs the object's ``__getattr__`` fallback; errors
    other than AttributeError raised by that fallback propagate.

    Args:
        obj: Object to probe
        name: Method name
        include_all: Count private and protected methods too; when False
            only public responders count
    """
    vis = visibility_across_tables(MethodTable.for_object(obj), name)
    if vis is not None:
        return include_all or vis is Visibility.PUBLIC
    static = inspect.getattr_static(obj, name, _MISSING)
    if static is _MISSING:
        return callable(getattr(obj, name, None))
    if isinstance(static, _SLOT_DESCRIPTORS):
        # Builtin slot storage; reading it runs no target code
        return callable(getattr(obj, name, None))
    if hasattr(type(static), "__get__"):
        # A property or other descriptor; the value is unknown without running it
        return False
    return callable(static)


def method_visibility_for(obj: Any, name: str) -> Optional[Visibility]:
    """
    Visibility of ``name`` on one object.

    A name answered only through ``__getattr__`` is public: the fallback
    has no way to tell who is calling, so it cannot implement a private or
    protected method.
    """
    vis = visibility_across_tables(MethodTable.for_object(obj), name)
    if vis is None and responds_to(obj, name, include_all=False):
        return Visibility.PUBLIC
    return vis
