"""Tests for shapeguard.predicates - base type predicates."""

import pytest

from shapeguard import UNDEFINED
from shapeguard import predicates as p


class TestScalarPredicates:
    @pytest.mark.parametrize(
        "predicate, good, bad",
        [
            (p.is_string, "x", 1),
            (p.is_number, 1.5, True),
            (p.is_boolean, False, 0),
            (p.is_object, {"a": 1}, []),
        ],
    )
    def test_base(self, predicate, good, bad):
        assert predicate(good)
        assert not predicate(bad)
        assert not predicate(None)
        assert not predicate(UNDEFINED)

    @pytest.mark.parametrize(
        "predicate, good",
        [
            (p.is_optional_string, "x"),
            (p.is_optional_number, 2),
            (p.is_optional_boolean, True),
            (p.is_optional_object, {}),
        ],
    )
    def test_optional(self, predicate, good):
        assert predicate(good)
        assert predicate(UNDEFINED)
        assert not predicate(None)

    @pytest.mark.parametrize(
        "predicate, good",
        [
            (p.is_nullable_string, "x"),
            (p.is_nullable_number, 2),
            (p.is_nullable_boolean, True),
            (p.is_nullable_object, {}),
        ],
    )
    def test_nullable(self, predicate, good):
        assert predicate(good)
        assert predicate(None)
        assert not predicate(UNDEFINED)


class TestListPredicates:
    @pytest.mark.parametrize(
        "predicate, good, bad",
        [
            (p.is_strings, ["a", "b"], ["a", None]),
            (p.is_numbers, [1, 2.0], [1, "2"]),
            (p.is_booleans, [True], [True, 1]),
            (p.is_objects, [{}, {"a": 1}], [{}, []]),
        ],
    )
    def test_lists(self, predicate, good, bad):
        assert predicate(good)
        assert predicate([])
        assert not predicate(bad)
        assert not predicate("not a list")

    @pytest.mark.parametrize(
        "predicate, good",
        [
            (p.is_nullable_strings, ["a", None]),
            (p.is_nullable_numbers, [None, 1]),
            (p.is_nullable_booleans, [False, None]),
            (p.is_nullable_objects, [None, {}]),
        ],
    )
    def test_nullable_lists(self, predicate, good):
        assert predicate(good)
        assert not predicate(None)

    def test_somethings(self):
        assert p.is_somethings([2, 4], lambda v: v % 2 == 0)
        assert not p.is_somethings([2, 3], lambda v: v % 2 == 0)
        assert not p.is_somethings({"a": 2}, lambda v: True)

    def test_nullable_somethings(self):
        assert p.is_nullable_somethings([2, None], lambda v: v % 2 == 0)
        assert not p.is_nullable_somethings([None, 3], lambda v: v % 2 == 0)
