"""
Method references.

A method reference names a method on a target that may or may not be
loaded, and answers the questions a double needs before it stubs or
verifies that method:

1. is_implemented   - will calling it avoid an AttributeError?
2. is_unimplemented - do we know for certain that it would fail?
3. is_defined       - can we get a concrete handle to introspect?
4. visibility       - public, protected or private?
5. with_signature   - hand the handle's signature to a callback

Every query goes through the target reference's ``when_loaded``. When the
target is not loaded the answer is a conservative default: not
implemented, not unimplemented, not defined, public. is_implemented and
is_unimplemented are therefore both False for an unloaded target.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from methodref.logging_config import logger
from .config import get_config
from .exceptions import InvalidTargetError
from .method_signature import MethodSignature, build_signature
from .method_table import MethodTable
from .object_reference import NOT_LOADED, ObjectReference, reference_for
from .visibility import Visibility
from .visibility_resolver import (
    instance_method_visibility_for,
    method_defined_at_any_visibility,
    method_visibility_for,
    responds_to,
)


class MethodReference(ABC):
    """A method on a target that may not be loaded or may not exist."""

    def __init__(self, object_reference: ObjectReference, method_name: str):
        if not isinstance(object_reference, ObjectReference):
            raise InvalidTargetError(object_reference, "expected an ObjectReference")
        if not isinstance(method_name, str) or not method_name:
            raise InvalidTargetError(method_name, "method name must be a non-empty string")
        self._object_reference = object_reference
        self._method_name = method_name

    @classmethod
    def for_target(cls, target: Any, method_name: str) -> "MethodReference":
        """Build a reference from a dotted name, an object or an ObjectReference."""
        return cls(reference_for(target), method_name)

    @property
    def object_reference(self) -> ObjectReference:
        return self._object_reference

    @property
    def method_name(self) -> str:
        return self._method_name

    def is_implemented(self) -> bool:
        """
        True if calling the method will not raise AttributeError.

        The method may be provided dynamically by ``__getattr__``.
        """
        result = self._object_reference.when_loaded(self._method_implemented)
        return self._report("is_implemented", False if result is NOT_LOADED else bool(result))

    def is_unimplemented(self) -> bool:
        """
        True if we definitively know that calling the method will fail.

        This is not simply the inverse of is_implemented: while the target
        is not loaded we cannot tell, and both return False.
        """
        result = self._object_reference.when_loaded(
            lambda target: not self._method_implemented(target)
        )
        return self._report("is_unimplemented", False if result is NOT_LOADED else result)

    def is_defined(self) -> bool:
        """True if we can get a handle for the method and inspect its arity."""
        result = self._object_reference.when_loaded(self._method_defined)
        return self._report("is_defined", False if result is NOT_LOADED else bool(result))

    def with_signature(self, callback: Callable[[MethodSignature], Any]) -> Any:
        """
        Call ``callback`` with the method's signature if it is defined.

        Returns:
            The callback's return value, or None when the method is not
            defined (the callback is not called)
        """
        handle = self._original_method()
        if handle is None:
            return None
        return callback(build_signature(handle))

    def visibility(self) -> Visibility:
        """
        Visibility of the method.

        Unloaded targets and undeterminable methods are treated as public;
        wrongly treating a method as private is the worse mistake.
        """
        result = self._object_reference.when_loaded(self._visibility_from)
        if result is NOT_LOADED or result is None:
            result = Visibility.PUBLIC
        return self._report("visibility", result)

    def _original_method(self) -> Optional[Any]:
        def find(target):
            if not self._method_defined(target):
                return None
            return self._find_method(target)

        result = self._object_reference.when_loaded(find)
        return None if result is NOT_LOADED else result

    def _report(self, query: str, value: Any) -> Any:
        if get_config().log_queries:
            logger.debug(f"{self!r}.{query}() -> {value}")
        return value

    @abstractmethod
    def _method_implemented(self, target: Any) -> bool:
        """Whether sending the message to the loaded target succeeds."""

    @abstractmethod
    def _method_defined(self, target: Any) -> bool:
        """Whether the loaded target declares the method."""

    @abstractmethod
    def _find_method(self, target: Any) -> Any:
        """Handle for a method already known to be declared."""

    @abstractmethod
    def _visibility_from(self, target: Any) -> Optional[Visibility]:
        """Visibility on the loaded target, or None if undeterminable."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._object_reference.description()}, {self._method_name!r})"


class InstanceMethodReference(MethodReference):
    """
    An instance method of a class, shared by all of its instances.

    Ideally implemented-ness would be probed on an instance, which would
    also see methods answered by ``__getattr__``. There is no instance to
    probe, so such methods are reported as not implemented.
    """

    def _method_implemented(self, klass: Any) -> bool:
        return method_defined_at_any_visibility(MethodTable.for_class(klass), self._method_name)

    _method_defined = _method_implemented

    def _find_method(self, klass: Any) -> Any:
        return MethodTable.for_class(klass).unbound_method(self._method_name)

    def _visibility_from(self, klass: Any) -> Optional[Visibility]:
        return instance_method_visibility_for(klass, self._method_name)


class ObjectMethodReference(MethodReference):
    """A method on one specific object, including singleton attributes."""

    def _method_implemented(self, obj: Any) -> bool:
        return responds_to(obj, self._method_name, include_all=True)

    def _method_defined(self, obj: Any) -> bool:
        return method_defined_at_any_visibility(MethodTable.for_object(obj), self._method_name)

    def _find_method(self, obj: Any) -> Any:
        entry = MethodTable.for_object(obj).lookup(self._method_name)
        return getattr(obj, entry.attr_name)

    def _visibility_from(self, obj: Any) -> Optional[Visibility]:
        return method_visibility_for(obj, self._method_name)
