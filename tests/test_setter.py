"""Tests for set."""

import pytest

from nestpatch.errors import IndexOutOfBounds, NotAContainer
from nestpatch.getter import get
from nestpatch.setter import set as set_value


def test_set_creates_intermediate_containers():
    assert set_value({}, ["a", "b", "c"], 1) == {"a": {"b": {"c": 1}}}

def test_set_lookahead_list():
    assert set_value({}, ["a", 0, "b"], 1) == {"a": [{"b": 1}]}

def test_set_overwrites():
    assert set_value({"a": {"b": 1}}, "/a/b", 2) == {"a": {"b": 2}}

def test_set_leaves_original_untouched():
    data = {"a": {"b": 1}}
    result = set_value(data, ["a", "c"], 2)
    assert data == {"a": {"b": 1}}
    assert result == {"a": {"b": 1, "c": 2}}

def test_set_in_place():
    data = {"a": {}}
    result = set_value(data, ["a", "b"], 1, in_place=True)
    assert result is data
    assert data == {"a": {"b": 1}}

def test_set_append():
    assert set_value({"xs": [1]}, ["xs", "-"], 2) == {"xs": [1, 2]}
    assert set_value({"xs": [1]}, ["xs", 1], 2) == {"xs": [1, 2]}

def test_set_sequence_element():
    assert set_value([1, 2, 3], ["last"], 9) == [1, 2, 9]

def test_set_past_end_raises():
    with pytest.raises(IndexOutOfBounds):
        set_value({"xs": []}, ["xs", 3], 1)

def test_set_through_scalar_raises():
    with pytest.raises(NotAContainer):
        set_value({"a": "text"}, ["a", "b"], 1)

@pytest.mark.parametrize("value", [5, "text", None, [1, 2], {"b": 1}])
def test_set_root_returns_value(value):
    assert set_value({"a": 1}, [], value) == value

@pytest.mark.parametrize("path", [["a"], ["a", "b"], "/xs/0", ["xs", "last"]])
def test_set_get_round_trip(path):
    data = {"a": {"b": 1}, "xs": [1, 2]}
    assert get(set_value(data, path, "x"), path) == "x"
