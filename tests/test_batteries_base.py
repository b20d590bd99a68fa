import pytest

from batteries.batteries_base import (
    clone, ielems, ireverse, is_sequence, leaves, prototype, truthy,
)
from batteries.batteries_datatypes import ContractViolation, Object
from batteries.batteries_list import List


@pytest.mark.parametrize("value, expected", [
    (None, False),
    (False, False),
    (True, True),
    (0, True),
    ("", True),
    ([], True),
    (0.0, True),
])
def test_truthy(value, expected):
    assert truthy(value) is expected


@pytest.mark.parametrize("value, expected", [
    ([1], True),
    ((1,), True),
    (range(3), True),
    (List([1]), True),
    ("abc", False),
    (b"abc", False),
    ({"a": 1}, False),
    ({1, 2}, False),
    (5, False),
    (None, False),
])
def test_is_sequence(value, expected):
    assert is_sequence(value) is expected


@pytest.mark.parametrize("value, expected", [
    (None, "none"),
    (True, "boolean"),
    (1, "int"),
    (1.5, "float"),
    ("s", "string"),
    ({}, "mapping"),
    ([], "sequence"),
    (len, "function"),
    (List(), "List"),
    (Object(), "Object"),
    ({1}, "set"),
])
def test_prototype(value, expected):
    assert prototype(value) == expected


def test_ielems_iterates_in_order():
    assert list(ielems([1, 2, 3])) == [1, 2, 3]
    assert list(ielems(List(["a", "b"]))) == ["a", "b"]


def test_ielems_rejects_non_sequences():
    with pytest.raises(ContractViolation, match=r"bad argument #1 to 'ielems' \(sequence expected, got mapping\)"):
        ielems({"a": 1})


def test_ireverse_returns_a_new_plain_list():
    source = (1, 2, 3)
    assert ireverse(source) == [3, 2, 1]
    assert ireverse([]) == []


def test_leaves_descend_into_nested_sequences():
    assert list(leaves([1, [2, (3, [4])], "ab", List([5])])) == [1, 2, 3, 4, "ab", 5]


def test_clone_copies_the_initializer():
    proto = List([1])
    assert clone(proto) == proto
    made = clone(proto, [2, 3])
    assert made == List([2, 3])
    assert made.meta is proto.meta
