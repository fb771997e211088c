"""
Signatures built from resolved method handles.

The double layer uses these to check that an expectation's arguments
could actually be passed to the real method.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from methodref.logging_config import logger
from .method_table import UnboundMethod


_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True)
class MethodSignature:
    """Arity and parameter-kind summary of a method."""
    required_positional_count: int
    optional_positional_count: int
    has_var_positional: bool
    required_keywords: Tuple[str, ...] = ()
    optional_keywords: Tuple[str, ...] = ()
    has_var_keyword: bool = False
    # None means the callable could not be introspected; anything is accepted
    signature: Optional[inspect.Signature] = field(default=None, compare=False, repr=False)

    @classmethod
    def permissive(cls) -> "MethodSignature":
        return cls(0, 0, True, has_var_keyword=True)

    @classmethod
    def from_inspect(cls, sig: inspect.Signature) -> "MethodSignature":
        required = optional = 0
        var_positional = var_keyword = False
        required_kw, optional_kw = [], []

        for param in sig.parameters.values():
            has_default = param.default is not inspect.Parameter.empty
            if param.kind in _POSITIONAL:
                if has_default:
                    optional += 1
                else:
                    required += 1
            elif param.kind is inspect.Parameter.VAR_POSITIONAL:
                var_positional = True
            elif param.kind is inspect.Parameter.KEYWORD_ONLY:
                (optional_kw if has_default else required_kw).append(param.name)
            elif param.kind is inspect.Parameter.VAR_KEYWORD:
                var_keyword = True

        return cls(
            required_positional_count=required,
            optional_positional_count=optional,
            has_var_positional=var_positional,
            required_keywords=tuple(required_kw),
            optional_keywords=tuple(optional_kw),
            has_var_keyword=var_keyword,
            signature=sig,
        )

    @property
    def has_keywords(self) -> bool:
        return bool(self.required_keywords or self.optional_keywords or self.has_var_keyword)

    @property
    def min_positional(self) -> int:
        return self.required_positional_count

    @property
    def max_positional(self) -> Optional[int]:
        """None when any number of positional arguments is accepted."""
        if self.has_var_positional:
            return None
        return self.required_positional_count + self.optional_positional_count

    def accepts(self, *args: Any, **kwargs: Any) -> bool:
        """True if a call with these arguments would bind to the method."""
        if self.signature is None:
            return True
        try:
            self.signature.bind(*args, **kwargs)
        except TypeError:
            return False
        return True

    def description(self) -> str:
        if self.signature is None:
            return "any arguments"

        low, high = self.min_positional, self.max_positional
        if high is None:
            text = f"{low} or more arguments"
        elif low == high:
            text = f"{low} argument" + ("" if low == 1 else "s")
        else:
            text = f"{low} to {high} arguments"

        keywords = self.required_keywords + self.optional_keywords
        if keywords:
            text += ", keyword: " + ", ".join(keywords)
        if self.has_var_keyword:
            text += ", any keywords"
        return text


def build_signature(handle: Any) -> MethodSignature:
    """
    Build a MethodSignature from a resolved method handle.

    Args:
        handle: An UnboundMethod from a class, or any bound callable

    Returns:
        The signature as seen by a caller; the receiver parameter of an
        unbound instance method is dropped
    """
    if isinstance(handle, UnboundMethod):
        func, drop_receiver = handle.function, handle.takes_receiver
    else:
        func, drop_receiver = handle, False

    try:
        sig = inspect.signature(func)
    except (ValueError, TypeError):
        logger.debug(f"No introspectable signature for {handle!r}")
        return MethodSignature.permissive()

    if drop_receiver:
        params = list(sig.parameters.values())
        if params and params[0].kind in _POSITIONAL:
            sig = sig.replace(parameters=params[1:])

    return MethodSignature.from_inspect(sig)
