"""Tests for nestpatch.model."""

import copy

import pytest

from nestpatch.errors import InvalidOperation
from nestpatch.model import (
    FromEnd,
    Index,
    Key,
    Missing,
    OpKind,
    Operation,
    _MissingType,
)


class TestMissing:
    def test_singleton(self):
        assert Missing is _MissingType()

    def test_falsy(self):
        assert not Missing

    def test_repr(self):
        assert repr(Missing) == "Missing"

    def test_survives_deepcopy(self):
        assert copy.deepcopy(Missing) is Missing


class TestSteps:
    def test_index_rejects_negative(self):
        with pytest.raises(InvalidOperation):
            Index(-1)

    def test_index_rejects_bool(self):
        with pytest.raises(InvalidOperation):
            Index(True)

    def test_from_end_rejects_negative(self):
        with pytest.raises(InvalidOperation):
            FromEnd(-2)

    def test_from_end_resolve(self):
        assert FromEnd(0).resolve(3) == 2
        assert FromEnd(2).resolve(3) == 0

    def test_from_end_defaults_to_last(self):
        assert FromEnd() == FromEnd(0)

    def test_steps_are_hashable(self):
        assert len({Key("a"), Key("a"), Index(0), FromEnd(0)}) == 3

    def test_key_rejects_unhashable_name(self):
        with pytest.raises(InvalidOperation):
            Key([1])

    def test_repr(self):
        assert repr(Key("a")) == "Key('a')"
        assert repr(Index(1)) == "Index(1)"
        assert repr(FromEnd(2)) == "FromEnd(2)"


class TestOperation:
    def test_path_normalised_from_pointer(self):
        op = Operation(OpKind.Add, "/a/0", 1)
        assert op.path == ("a", "0")

    def test_path_normalised_from_list(self):
        op = Operation(OpKind.Remove, ["a", 0])
        assert op.path == ("a", 0)
        assert op.value is Missing

    def test_value_required(self):
        with pytest.raises(InvalidOperation):
            Operation(OpKind.Replace, "/a")

    def test_none_is_a_value(self):
        op = Operation(OpKind.Add, "/a", None)
        assert op.value is None

    def test_from_required(self):
        with pytest.raises(InvalidOperation):
            Operation(OpKind.Move, "/a")

    def test_from_dict(self):
        op = Operation.from_dict({"op": "move", "from": "/a", "path": "/b"})
        assert op.op is OpKind.Move
        assert op.from_ == ("a",)
        assert op.path == ("b",)

    def test_from_dict_unknown_op(self):
        with pytest.raises(InvalidOperation, match="unknown patch operation"):
            Operation.from_dict({"op": "frobnicate", "path": ""})

    def test_from_dict_missing_path(self):
        with pytest.raises(InvalidOperation, match="requires 'path'"):
            Operation.from_dict({"op": "remove"})

    def test_from_dict_missing_value(self):
        with pytest.raises(InvalidOperation, match="requires a value"):
            Operation.from_dict({"op": "test", "path": "/a"})

    def test_from_dict_not_a_mapping(self):
        with pytest.raises(InvalidOperation):
            Operation.from_dict(["add", "/a", 1])

    def test_to_dict(self):
        record = {"op": "copy", "from": "/a/b", "path": "/c"}
        assert Operation.from_dict(record).to_dict() == record

    def test_to_dict_keeps_none_value(self):
        op = Operation(OpKind.Add, ["x"], None)
        assert op.to_dict() == {"op": "add", "path": "/x", "value": None}
