"""
Declared-method tables.

A MethodTable is an ordered list of namespaces searched for a method name,
the same way Python attribute lookup walks them. Two lookup strategies
exist:

1. for_class  - a class's MRO; the methods every instance shares
2. for_object - one object's own ``__dict__`` followed by its type's MRO
   (for a class object: the class's MRO followed by its metaclass's MRO)

Only method-like entries count as declared: functions, builtin method
descriptors, staticmethod/classmethod wrappers, non-data descriptors that
wrap a function (functools.partialmethod, functools.singledispatchmethod)
and other callable non-class attributes. Properties and cached properties
are attributes, not methods. Dynamic fallback through ``__getattr__`` is never
consulted here.
"""

import functools
import inspect
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .visibility import Visibility, declared_visibility, is_private_name, mangle


Namespace = Tuple[Any, Mapping[str, Any]]


@dataclass(frozen=True)
class MethodEntry:
    """A method found in one namespace of a table."""
    name: str
    attr_name: str  # as stored; differs from name for mangled private methods
    owner: Any
    raw: Any
    visibility: Visibility


@dataclass(frozen=True)
class UnboundMethod:
    """
    Instance-method handle obtained from a class without an instance.

    ``takes_receiver`` is True when calling through an instance binds the
    first parameter, so signatures built from this handle skip it.
    """
    owner: Any
    name: str
    function: Any
    takes_receiver: bool

    def __repr__(self) -> str:
        owner = getattr(self.owner, "__qualname__", repr(self.owner))
        return f"<UnboundMethod {owner}.{self.name}>"


def is_data_attribute(raw: Any) -> bool:
    """Properties, cached properties and other attributes read as values."""
    if isinstance(raw, (property, functools.cached_property)):
        return True
    kind = type(raw)
    return hasattr(kind, "__set__") or hasattr(kind, "__delete__")


def _method_descriptor_func(raw: Any) -> Optional[Any]:
    """
    Function behind a non-callable method descriptor.

    Covers functools.partialmethod and functools.singledispatchmethod,
    and any other non-data descriptor that wraps a callable in ``func``
    or ``__func__``. Nothing is bound or called to find out.
    """
    if not hasattr(type(raw), "__get__") or is_data_attribute(raw):
        return None
    for attr in ("func", "__func__"):
        func = getattr(raw, attr, None)
        if callable(func) or isinstance(func, (staticmethod, classmethod)):
            return func
    return None


def is_method_like(raw: Any) -> bool:
    if isinstance(raw, (staticmethod, classmethod)):
        return True
    if isinstance(raw, type) or is_data_attribute(raw):
        return False
    return callable(raw) or _method_descriptor_func(raw) is not None


def _own_namespace(obj: Any) -> Optional[Mapping[str, Any]]:
    # Bypass custom __getattribute__/__getattr__ on the target
    try:
        namespace = object.__getattribute__(obj, "__dict__")
    except AttributeError:
        return None
    return namespace if isinstance(namespace, Mapping) else None


class MethodTable:
    """Ordered view over the namespaces a method name is looked up in."""

    def __init__(self, subject: Any, namespaces: Sequence[Namespace]):
        self.subject = subject
        self._namespaces: List[Namespace] = list(namespaces)

    @classmethod
    def for_class(cls, klass: Any) -> "MethodTable":
        """Instance-method table of a class. Non-class targets have no entries."""
        mro = klass.__mro__ if isinstance(klass, type) else ()
        return cls(klass, [(k, vars(k)) for k in mro])

    @classmethod
    def for_object(cls, obj: Any) -> "MethodTable":
        """Effective method table of one object, singleton entries first."""
        namespaces: List[Namespace] = []
        if isinstance(obj, type):
            namespaces.extend((k, vars(k)) for k in obj.__mro__)
        else:
            own = _own_namespace(obj)
            if own is not None:
                namespaces.append((type(obj), own))
        namespaces.extend((k, vars(k)) for k in type(obj).__mro__)
        return cls(obj, namespaces)

    def _candidates(self, name: str, owner: Any) -> List[str]:
        if not is_private_name(name):
            return [name]
        chain = owner.__mro__ if isinstance(owner, type) else ()
        names = [mangle(name, klass) for klass in chain]
        names.append(name)
        return list(dict.fromkeys(names))

    def lookup(self, name: str) -> Optional[MethodEntry]:
        """
        Find the entry a lookup of ``name`` would hit.

        The first namespace holding the name wins. If what it holds is not
        a method (an instance attribute shadowing a method, say), the name
        is not declared.
        """
        for owner, namespace in self._namespaces:
            for attr_name in self._candidates(name, owner):
                if attr_name not in namespace:
                    continue
                raw = namespace[attr_name]
                if not is_method_like(raw):
                    return None
                return MethodEntry(
                    name=name,
                    attr_name=attr_name,
                    owner=owner,
                    raw=raw,
                    visibility=declared_visibility(attr_name, raw, owner),
                )
        return None

    def method_defined(self, name: str, visibility: Visibility) -> bool:
        """True if ``name`` is declared here with exactly ``visibility``."""
        entry = self.lookup(name)
        return entry is not None and entry.visibility is visibility

    def public_method_defined(self, name: str) -> bool:
        return self.method_defined(name, Visibility.PUBLIC)

    def private_method_defined(self, name: str) -> bool:
        return self.method_defined(name, Visibility.PRIVATE)

    def protected_method_defined(self, name: str) -> bool:
        return self.method_defined(name, Visibility.PROTECTED)

    def unbound_method(self, name: str) -> Optional[UnboundMethod]:
        """Handle for a declared instance method, or None if undeclared."""
        entry = self.lookup(name)
        if entry is None:
            return None
        raw = entry.raw
        if isinstance(raw, staticmethod):
            return UnboundMethod(entry.owner, entry.attr_name, raw.__func__, False)
        if isinstance(raw, classmethod):
            # Bound to the class, like calling it through any instance
            return UnboundMethod(entry.owner, entry.attr_name, raw.__get__(None, self.subject), False)
        if isinstance(raw, functools.partialmethod):
            # The unbound form carries the pre-filled arguments for inspect
            return UnboundMethod(entry.owner, entry.attr_name, raw.__get__(None, self.subject), True)
        if not callable(raw):
            return UnboundMethod(entry.owner, entry.attr_name, _method_descriptor_func(raw), True)
        takes_receiver = inspect.isfunction(raw) or inspect.ismethoddescriptor(raw)
        return UnboundMethod(entry.owner, entry.attr_name, raw, takes_receiver)

    def __repr__(self) -> str:
        owners = [getattr(owner, "__name__", repr(owner)) for owner, _ in self._namespaces]
        return f"MethodTable({self.subject!r}, {owners})"
