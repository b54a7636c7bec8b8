"""End-to-end scenarios through the public package API."""

import pytest

import nestpatch
from nestpatch import (
    FromEnd,
    PatchOperationFailed,
    add,
    copy,
    exists,
    flatten,
    get,
    list_,
    move,
    patch,
    remove,
    replace,
)


def test_walkthrough():
    """{} → add, add, add, replace, remove, move."""
    doc = add({}, ["a"], {"b": {"c": "here"}})
    assert doc == {"a": {"b": {"c": "here"}}}

    doc = add(doc, ["a", "b", "d"], [])
    doc = add(doc, ["a", "b", "d", 0], "diamond")
    assert doc == {"a": {"b": {"c": "here", "d": ["diamond"]}}}

    doc = replace(doc, ["a", "b", "d", "last"], "dangerous")
    assert doc == {"a": {"b": {"c": "here", "d": ["dangerous"]}}}

    doc = remove(doc, ["a", "b", "c"])
    doc = move(doc, ["a", "b", "d"], ["d"])
    assert doc == {"a": {"b": {}}, "d": ["dangerous"]}


def test_patch_atomicity():
    doc = {"a": {"b": {"c": "x"}}}
    ops = [
        {"op": "replace", "path": ["a", "b", "c"], "value": 42},
        {"op": "test", "path": ["a", "b", "c"], "value": "C"},
    ]
    with pytest.raises(PatchOperationFailed) as info:
        patch(doc, ops)
    assert info.value.index == 1
    assert doc == {"a": {"b": {"c": "x"}}}


def test_list_scenario():
    pantry = {"legumes": [{"instock": 4, "name": "pinto beans", "unit": "lbs"}]}
    assert list(list_(pantry)) == [
        (("legumes", 0, "instock"), 4),
        (("legumes", 0, "name"), "pinto beans"),
        (("legumes", 0, "unit"), "lbs"),
    ]


@pytest.mark.parametrize("value", [0, "s", None, [1], {"k": "v"}])
def test_replace_at_root_yields_value(value):
    for container in ({"a": 1}, [1, 2], {}):
        assert replace(container, [], value) == value


def test_set_get_round_trip():
    data = {"a": [{"b": 1}]}
    for path in (["a", 0, "b"], ["a", "last"], "/a", ["new", "deep", 0]):
        assert get(nestpatch.set(data, path, "x"), path) == "x"


def test_copy_is_non_destructive():
    data = {"src": {"v": [1, 2]}, "dst": []}
    result = copy(data, "/src", "/dst/-")
    assert exists(result, "/src")
    assert get(result, "/src") == {"v": [1, 2]}
    assert get(result, ["dst", FromEnd(0)]) == {"v": [1, 2]}


def test_move_conservation():
    data = {"a": {"b": [1, {"c": 2}]}, "z": {}}
    before = flatten(data)
    moved = move(data, "/a/b", "/z/b")
    after = flatten(moved)
    relocated = {("z",) + path[1:]: v for path, v in before.items()}
    assert after == relocated


def test_in_and_at_exported():
    data = {}
    nestpatch.in_(data, ["x", 0]).write(1)
    assert data == {"x": [1]}
    assert nestpatch.at(data, "/x/0").read() == 1
