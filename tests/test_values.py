"""Tests for kind detection, deep cloning and equality."""

from collections import OrderedDict

import pytest

from nestpatch.errors import CyclicStructure
from nestpatch.model import Kind
from nestpatch.values import deep_clone, kind_of, values_equal, working_copy


# ---------------------------------------------------------------------------
# kind_of
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    ({}, Kind.Mapping),
    (OrderedDict(), Kind.Mapping),
    ([], Kind.Sequence),
    ("abc", None),
    (b"abc", None),
    (bytearray(b"abc"), None),
    ((1, 2), None),
    (None, None),
    (3.5, None),
])
def test_kind_of(value, expected):
    assert kind_of(value) is expected


# ---------------------------------------------------------------------------
# deep_clone / working_copy
# ---------------------------------------------------------------------------

def test_deep_clone_is_independent():
    data = {"a": {"b": [1, {"c": 2}]}}
    clone = deep_clone(data)
    assert clone == data
    clone["a"]["b"][1]["c"] = 99
    assert data["a"]["b"][1]["c"] == 2

def test_deep_clone_keeps_container_type():
    data = OrderedDict([("z", 1), ("a", 2)])
    clone = deep_clone(data)
    assert isinstance(clone, OrderedDict)
    assert list(clone) == ["z", "a"]

def test_deep_clone_scalar():
    assert deep_clone(5) == 5
    assert deep_clone(None) is None

def test_deep_clone_shared_reference_is_not_a_cycle():
    shared = [1]
    clone = deep_clone({"a": shared, "b": shared})
    assert clone == {"a": [1], "b": [1]}
    assert clone["a"] is not clone["b"]

def test_deep_clone_rejects_cycles():
    data = {"a": []}
    data["a"].append(data)
    with pytest.raises(CyclicStructure):
        deep_clone(data)

def test_working_copy_in_place_is_identity():
    data = {"a": 1}
    assert working_copy(data, in_place=True) is data

def test_working_copy_clones():
    data = {"a": [1]}
    work = working_copy(data, in_place=False)
    assert work == data
    assert work is not data
    assert work["a"] is not data["a"]


# ---------------------------------------------------------------------------
# values_equal
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("a, b, expected", [
    ({"a": 1, "b": 2}, {"b": 2, "a": 1}, True),
    ([1, [2]], [1, [2]], True),
    (1, 1.0, True),
    (True, True, True),
    (1, True, False),
    (0, False, False),
    ([1], (1,), False),
    ({"a": 1}, {"a": 1, "b": 2}, False),
    ({"a": 1}, {"b": 1}, False),
    ([1, 2], [2, 1], False),
    ("C", "x", False),
    (None, None, True),
    ({"a": [True]}, {"a": [1]}, False),
])
def test_values_equal(a, b, expected):
    assert values_equal(a, b) is expected
