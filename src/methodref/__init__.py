"""
methodref: method existence, handle and visibility queries for test doubles.

Answers, for a named method on a class or an object that may not be loaded
yet, whether calling it will work, whether a concrete handle can be
inspected, and what its visibility is.

Usage:
    from methodref import InstanceMethodReference

    ref = InstanceMethodReference.for_target("billing.models.Invoice", "total")
    if ref.is_defined():
        ref.with_signature(lambda sig: sig.accepts(1, 2))

Override via environment:
    METHODREF_IMPORT_ON_RESOLVE=1 pytest
"""

from .config import MethodRefConfig, get_config, load_config, reset_config
from .exceptions import ConfigError, InvalidTargetError, MethodRefError
from .method_reference import InstanceMethodReference, MethodReference, ObjectMethodReference
from .method_signature import MethodSignature, build_signature
from .method_table import MethodEntry, MethodTable, UnboundMethod
from .object_reference import (
    NOT_LOADED,
    DirectObjectReference,
    NamedObjectReference,
    ObjectReference,
    reference_for,
)
from .visibility import Visibility, private, protected, public
from .visibility_resolver import (
    instance_method_visibility_for,
    method_defined_at_any_visibility,
    method_visibility_for,
    responds_to,
    visibility_across_tables,
)

__version__ = "0.1.0"

__all__ = [
    "MethodReference",
    "InstanceMethodReference",
    "ObjectMethodReference",
    "ObjectReference",
    "DirectObjectReference",
    "NamedObjectReference",
    "reference_for",
    "NOT_LOADED",
    "MethodSignature",
    "build_signature",
    "MethodTable",
    "MethodEntry",
    "UnboundMethod",
    "Visibility",
    "public",
    "protected",
    "private",
    "visibility_across_tables",
    "instance_method_visibility_for",
    "method_visibility_for",
    "method_defined_at_any_visibility",
    "responds_to",
    "MethodRefConfig",
    "get_config",
    "load_config",
    "reset_config",
    "MethodRefError",
    "InvalidTargetError",
    "ConfigError",
]
