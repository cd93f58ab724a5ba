"""
Tests for structural equality.
"""
from dataclasses import dataclass

from subjective import structurally_equal


class Plain:
    def __init__(self, **fields):
        self.__dict__.update(fields)


@dataclass
class Point:
    x: int
    y: int


def test_equal_dicts_with_different_identity():
    assert structurally_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]})


def test_different_keys():
    assert not structurally_equal({"a": 1}, {"b": 1})


def test_list_length_mismatch():
    assert not structurally_equal([1, 2], [1, 2, 3])


def test_dataclasses_compare_by_value():
    assert structurally_equal(Point(1, 2), Point(1, 2))
    assert not structurally_equal(Point(1, 2), Point(2, 1))


def test_plain_objects_compare_fieldwise():
    assert structurally_equal(Plain(a=1, b=[1]), Plain(a=1, b=[1]))
    assert not structurally_equal(Plain(a=1), Plain(a=2))


def test_nested_plain_objects_in_dict():
    assert structurally_equal({"p": Plain(x=Plain(y=1))}, {"p": Plain(x=Plain(y=1))})


def test_mixed_numeric_types():
    assert structurally_equal(1, 1.0)


def test_different_types():
    assert not structurally_equal("1", 1)
    assert not structurally_equal([1], (1,))


def test_bool_never_equals_number():
    assert not structurally_equal(0, False)
    assert not structurally_equal(True, 1)
    assert not structurally_equal(1.0, True)
    assert not structurally_equal({"v": 0}, {"v": False})
    assert structurally_equal(True, True)


@dataclass
class Holder:
    item: Plain
    label: str = ""


def test_dataclass_fields_compared_structurally():
    assert structurally_equal(Holder(Plain(a=1)), Holder(Plain(a=1)))
    assert not structurally_equal(Holder(Plain(a=1)), Holder(Plain(a=2)))
    assert not structurally_equal(Holder(Plain(a=1), "x"), Holder(Plain(a=1), "y"))
