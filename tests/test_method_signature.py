"""
Tests for signatures built from method handles.
"""

import inspect
from unittest.mock import patch

from methodref import MethodSignature, MethodTable, UnboundMethod, build_signature


class Ledger:
    def post(self, amount, memo=None, *, currency="USD", account):
        pass

    def log(self, *entries, **meta):
        pass

    def only_positional(self, a, b, /):
        pass

    def close(self):
        pass


class TestBuildSignature:
    """Parameter counting."""

    def test_unbound_drops_receiver(self):
        sig = build_signature(MethodTable.for_class(Ledger).unbound_method("post"))
        assert sig.required_positional_count == 1
        assert sig.optional_positional_count == 1
        assert sig.has_var_positional is False
        assert sig.required_keywords == ("account",)
        assert sig.optional_keywords == ("currency",)
        assert sig.has_keywords is True

    def test_bound_method(self):
        """Bound methods are already missing their receiver."""
        sig = build_signature(Ledger().close)
        assert sig.required_positional_count == 0
        assert sig.max_positional == 0
        assert sig.has_keywords is False

    def test_variadic(self):
        sig = build_signature(Ledger().log)
        assert sig.has_var_positional is True
        assert sig.has_var_keyword is True
        assert sig.max_positional is None
        assert sig.has_keywords is True

    def test_receiver_kept_when_handle_does_not_bind(self):
        handle = UnboundMethod(Ledger, "helper", lambda a, b: None, False)
        assert build_signature(handle).required_positional_count == 2

    def test_builtin_method_descriptor(self):
        """Builtin descriptors drop their self parameter too."""
        handle = MethodTable.for_class(dict).unbound_method("get")
        assert handle.takes_receiver is True
        sig = build_signature(handle)
        assert sig.required_positional_count == 1
        assert sig.optional_positional_count == 1

    def test_uninspectable_callable_is_permissive(self):
        with patch("inspect.signature", side_effect=ValueError("no signature")):
            sig = build_signature(Ledger().close)
        assert sig == MethodSignature.permissive()
        assert sig.accepts(1, 2, three=3) is True
        assert sig.description() == "any arguments"


class TestAccepts:
    """Call compatibility checks."""

    def test_matching_calls(self):
        sig = build_signature(Ledger().post)
        assert sig.accepts(10, account="cash") is True
        assert sig.accepts(10, "rent", account="cash", currency="EUR") is True

    def test_mismatched_calls(self):
        sig = build_signature(Ledger().post)
        assert sig.accepts(10) is False
        assert sig.accepts(10, "rent", "extra", account="cash") is False
        assert sig.accepts(10, account="cash", colour="red") is False

    def test_positional_only(self):
        sig = build_signature(Ledger().only_positional)
        assert sig.accepts(1, 2) is True
        assert sig.accepts(a=1, b=2) is False


class TestDescription:
    """Human-readable arity."""

    def test_range_with_keywords(self):
        def handler(self, path, mode="r", *, encoding=None):
            pass

        sig = build_signature(UnboundMethod(object, "handler", handler, True))
        assert sig.description() == "1 to 2 arguments, keyword: encoding"

    def test_exact(self):
        assert build_signature(Ledger().close).description() == "0 arguments"
        assert build_signature(lambda value: None).description() == "1 argument"

    def test_variadic(self):
        assert build_signature(Ledger().log).description() == "0 or more arguments, any keywords"

    def test_from_inspect_keeps_signature(self):
        sig = MethodSignature.from_inspect(inspect.signature(lambda a, b=2: None))
        assert sig.signature is not None
        assert (sig.min_positional, sig.max_positional) == (1, 2)
