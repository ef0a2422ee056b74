import pickle

import grpc
import pytest

from operr.common.errors import (
    OpError,
    error_message,
    first_error,
    get_kind,
    is_kind,
    new,
    origin,
)
from operr.common.kinds import ErrorKind
from operr.http.errors import to_http_status
from operr.ops.reporter import ErrorReporter
from operr.transport.grpc_codes import to_grpc_code


def test_op_error_carries_fields():
    cause = ValueError("boom")
    err = new(ErrorKind.NOT_FOUND, "get", cause)
    assert isinstance(err, OpError)
    assert isinstance(err, Exception)
    assert err.kind is ErrorKind.NOT_FOUND
    assert err.op == "get"
    assert err.cause is cause


def test_op_error_is_immutable():
    err = new(ErrorKind.INTERNAL, "delete")
    with pytest.raises(AttributeError):
        err.kind = ErrorKind.NOT_FOUND
    with pytest.raises(AttributeError):
        err.op = "other"
    with pytest.raises(AttributeError):
        err.cause = ValueError("x")


def test_op_error_can_be_raised_and_caught():
    with pytest.raises(OpError) as exc_info:
        raise new(ErrorKind.TIMEOUT, "call", None)
    assert str(exc_info.value) == "call: request timeout"


def test_op_error_survives_pickling():
    err = new(ErrorKind.NOT_FOUND, "get", new(ErrorKind.INTERNAL, "fetch", ValueError("failed")))
    restored = pickle.loads(pickle.dumps(err))
    assert str(restored) == str(err)
    assert restored.kind is ErrorKind.NOT_FOUND


def test_zero_value():
    assert OpError().is_zero()
    assert new(ErrorKind.OTHER, "", None).is_zero()
    assert not new(ErrorKind.OTHER, "op", None).is_zero()
    assert not new(ErrorKind.INTERNAL, "", None).is_zero()
    assert not new(ErrorKind.OTHER, "", ValueError("x")).is_zero()


def test_public_helpers_are_documented():
    for helper in (new, first_error, get_kind, is_kind, origin, error_message):
        assert helper.__doc__, helper.__name__


class TestFirstError:
    def test_wraps_first_non_none_cause(self):
        first = ValueError("first")
        second = ValueError("second")
        err = first_error(ErrorKind.IO, "sync", None, first, second)
        assert err.kind is ErrorKind.IO
        assert err.op == "sync"
        assert err.cause is first

    def test_returns_none_without_failures(self):
        assert first_error(ErrorKind.IO, "sync", None, None) is None
        assert first_error(ErrorKind.IO, "sync") is None


class TestOrigin:
    def test_none(self):
        assert origin(None) is None

    def test_no_cause(self):
        assert origin(new(ErrorKind.INTERNAL, "delete", None)) is None

    def test_nested(self):
        raw = ValueError("failed")
        err = new(ErrorKind.INTERNAL, "delete", new(ErrorKind.NOT_FOUND, "db", raw))
        assert origin(err) is raw

    def test_direct(self):
        raw = ValueError("failed")
        assert origin(new(ErrorKind.INTERNAL, "delete", raw)) is raw

    def test_chain_ending_with_none(self):
        err = new(ErrorKind.INTERNAL, "a", new(ErrorKind.OTHER, "b", None))
        assert origin(err) is None

    def test_opaque_errors_are_not_unwrapped(self):
        inner = KeyError("k")
        try:
            try:
                raise inner
            except KeyError as exc:
                raise RuntimeError("outer") from exc
        except RuntimeError as exc:
            outer = exc
        assert origin(new(ErrorKind.IO, "x", outer)) is outer


class TestIsKind:
    @pytest.mark.parametrize("err", [None, ValueError("a special error"), "text"])
    def test_false_for_unclassified(self, err):
        assert not is_kind(ErrorKind.NOT_FOUND, err)

    def test_other_kind(self):
        err = new(ErrorKind.INTERNAL, "delete", ValueError("internal failure"))
        assert not is_kind(ErrorKind.NOT_FOUND, err)

    def test_same_kind(self):
        err = new(ErrorKind.NOT_FOUND, "get", ValueError("item not found"))
        assert is_kind(ErrorKind.NOT_FOUND, err)

    def test_walks_through_other_wrappers(self):
        raw = ValueError("item not found")
        err = new(ErrorKind.OTHER, "x", new(ErrorKind.OTHER, "", new(ErrorKind.NOT_FOUND, "y", raw)))
        assert is_kind(ErrorKind.NOT_FOUND, err)

    def test_first_explicit_kind_wins(self):
        err = new(ErrorKind.INTERNAL, "x", new(ErrorKind.NOT_FOUND, "y", ValueError("raw")))
        assert not is_kind(ErrorKind.NOT_FOUND, err)
        assert is_kind(ErrorKind.INTERNAL, err)

    def test_other_without_cause(self):
        assert not is_kind(ErrorKind.OTHER, new(ErrorKind.OTHER, "x", None))
        assert not is_kind(ErrorKind.NOT_FOUND, new(ErrorKind.OTHER, "x", None))


class TestGetKind:
    def test_unclassified(self):
        assert get_kind(None) is ErrorKind.OTHER
        assert get_kind(ValueError("x")) is ErrorKind.OTHER

    def test_only_outermost_node_counts(self):
        err = new(ErrorKind.OTHER, "x", new(ErrorKind.NOT_FOUND, "y", None))
        assert get_kind(err) is ErrorKind.OTHER
        assert is_kind(ErrorKind.NOT_FOUND, err)

    def test_out_of_range_kind_is_kept(self):
        assert get_kind(new(99, "x")) == 99


class TestMessage:
    def test_none(self):
        assert error_message(None) == "no error"

    def test_zero_value(self):
        assert str(OpError()) == "no error"

    def test_single_node(self):
        assert str(new(ErrorKind.NOT_FOUND, "get", None)) == "get: resource not found"

    def test_kind_only(self):
        assert str(new(ErrorKind.INTERNAL, "", None)) == "internal error"

    def test_other_kind_is_not_rendered(self):
        assert str(new(ErrorKind.OTHER, "get", None)) == "get"

    def test_nested_nodes(self):
        err = new(ErrorKind.NOT_FOUND, "get", new(ErrorKind.INTERNAL, "fetch", None))
        assert str(err) == "get: resource not found => fetch: internal error"

    def test_opaque_cause(self, raw_error):
        err = new(ErrorKind.NOT_FOUND, "get", new(ErrorKind.INTERNAL, "fetch", raw_error))
        assert str(err) == "get: resource not found => fetch: internal error: connection refused"

    def test_opaque_cause_behind_other_wrapper(self, raw_error):
        err = new(ErrorKind.NOT_FOUND, "get", new(ErrorKind.INTERNAL, "fetch", new(ErrorKind.OTHER, "", raw_error)))
        assert str(err) == "get: resource not found => fetch: internal error => connection refused"

    def test_zero_cause_is_skipped(self):
        err = new(ErrorKind.NOT_FOUND, "get", OpError())
        assert str(err) == "get: resource not found"

    def test_cause_only(self, raw_error):
        assert str(new(ErrorKind.OTHER, "", raw_error)) == "connection refused"
        assert str(new(ErrorKind.OTHER, "", new(ErrorKind.IO, "read"))) == "read: io error"

    def test_out_of_range_kind(self):
        assert str(new(99, "op")) == "op: unknown error type"

    def test_rendering_is_stable(self, raw_error):
        err = new(ErrorKind.TIMEOUT, "call", new(ErrorKind.IO, "dial", raw_error))
        assert str(err) == str(err)
        assert error_message(err) == str(err)
        assert err.cause.op == "dial"

    def test_repr_shows_fields(self):
        assert repr(new(ErrorKind.NOT_FOUND, "get")) == "OpError(kind=<ErrorKind.NOT_FOUND: 5>, op='get', cause=None)"


class TestDeepChains:
    DEPTH = 2500

    @pytest.fixture
    def deep_chain(self):
        raw = ValueError("raw")
        err = new(ErrorKind.NOT_FOUND, "leaf", raw)
        for i in range(self.DEPTH):
            err = new(ErrorKind.OTHER, f"layer{i}", err)
        return err, raw

    def test_message(self, deep_chain):
        err, _ = deep_chain
        message = str(err)
        assert message.startswith(f"layer{self.DEPTH - 1} => layer{self.DEPTH - 2} => ")
        assert message.endswith(" => layer0 => leaf: resource not found: raw")
        assert message.count(" => ") == self.DEPTH

    def test_inspection(self, deep_chain):
        err, raw = deep_chain
        assert is_kind(ErrorKind.NOT_FOUND, err)
        assert not is_kind(ErrorKind.INTERNAL, err)
        assert get_kind(err) is ErrorKind.OTHER
        assert origin(err) is raw

    def test_boundary_mappers(self, deep_chain):
        err, raw = deep_chain
        assert to_grpc_code(err) == grpc.StatusCode.NOT_FOUND
        assert to_http_status(err) == 404
        report = ErrorReporter().report(err)
        assert report.origin is raw
        assert report.http_status == 404

    def test_zero_leaf_under_deep_chain(self):
        err = OpError()
        for _ in range(self.DEPTH):
            err = new(ErrorKind.OTHER, "", err)
        # every wrapper is empty and the leaf is a zero value
        assert str(err) == "no error"
        assert origin(err) is None
        assert not is_kind(ErrorKind.OTHER, err)
