"""
Target references.

A target reference names the object whose methods are being reasoned about
and answers one question: is it loaded right now? Method references route
every query through ``when_loaded`` so a target that has not been imported
yet produces the conservative defaults instead of an error.
"""

import importlib
import sys
from abc import ABC, abstractmethod
from typing import Any, Callable

from methodref.logging_config import logger
from .config import get_config
from .exceptions import InvalidTargetError


class _NotLoaded:
    """Sentinel type for an unresolvable target."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_LOADED"

    def __reduce__(self):
        return (_NotLoaded, ())


NOT_LOADED = _NotLoaded()


class ObjectReference(ABC):
    """An object, or the name of one, that may not be loaded yet."""

    @abstractmethod
    def target(self) -> Any:
        """Return the referenced object, or NOT_LOADED."""

    @abstractmethod
    def description(self) -> str:
        """Human-readable name of the target."""

    def when_loaded(self, callback: Callable[[Any], Any]) -> Any:
        """
        Run callback with the target if it is currently loaded.

        Args:
            callback: Called exactly once with the resolved target

        Returns:
            The callback's return value, or NOT_LOADED when the target
            cannot be resolved (the callback is not invoked)
        """
        target = self.target()
        if target is NOT_LOADED:
            return NOT_LOADED
        return callback(target)

    def is_defined(self) -> bool:
        return self.target() is not NOT_LOADED

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description()})"


class DirectObjectReference(ObjectReference):
    """Reference to an object we already hold; always loaded."""

    def __init__(self, obj: Any):
        self._object = obj

    def target(self) -> Any:
        return self._object

    def description(self) -> str:
        return repr(self._object)


class NamedObjectReference(ObjectReference):
    """
    Reference to an object by dotted path, e.g. ``"billing.models.Invoice"``.

    The path is resolved against the longest module prefix that is already
    in ``sys.modules``, then the remaining parts are looked up as
    attributes. With ``import_on_resolve`` enabled, missing modules are
    imported on demand instead.
    """

    def __init__(self, name: str):
        parts = name.split(".") if isinstance(name, str) else []
        if not parts or not all(part.isidentifier() for part in parts):
            raise InvalidTargetError(name, "expected a dotted path of identifiers")
        self.name = name
        self._parts = parts

    def description(self) -> str:
        return self.name

    def target(self) -> Any:
        import_missing = get_config().import_on_resolve

        for i in range(len(self._parts), 0, -1):
            module_name = ".".join(self._parts[:i])
            module = sys.modules.get(module_name)
            if module is None and import_missing:
                try:
                    module = importlib.import_module(module_name)
                except ImportError:
                    continue
            if module is None:
                continue
            return self._walk(module, self._parts[i:])

        logger.debug(f"No loaded module for {self.name}")
        return NOT_LOADED

    def _walk(self, obj: Any, attrs) -> Any:
        for attr in attrs:
            try:
                obj = getattr(obj, attr)
            except AttributeError:
                logger.debug(f"{self.name} not loaded: missing attribute {attr!r}")
                return NOT_LOADED
        return obj


def reference_for(target: Any) -> ObjectReference:
    """
    Wrap a target in the matching reference type.

    Strings are dotted names, references pass through unchanged, and any
    other object is referenced directly.
    """
    if isinstance(target, ObjectReference):
        return target
    if isinstance(target, str):
        return NamedObjectReference(target)
    return DirectObjectReference(target)
