"""Tests for shapeguard.legacy - the deprecated eager checker."""

import io

import pytest

from shapeguard import InvalidInputError, LegacyChecker

pytestmark = pytest.mark.filterwarnings("ignore::DeprecationWarning")


@pytest.fixture
def person():
    return {
        "name": "John",
        "post": "asdf",
        "age": 20,
        "address": {"street": "1234", "city": "New York", "state": "NY", "zip": 12345},
        "hobbies": ["asdf"],
    }


class TestLegacyChecker:
    """Tests for LegacyChecker."""

    def test_emits_deprecation_warning(self, person):
        with pytest.warns(DeprecationWarning):
            LegacyChecker(person)

    def test_requires_mapping(self):
        with pytest.raises(InvalidInputError, match="You must pass an object"):
            LegacyChecker(["not", "a", "mapping"])

    def test_valid_chain(self, person):
        result = (
            LegacyChecker(person)
            .is_(["name", "post"]).as_("string")
            .is_("age").as_("number")
            .is_(["nationality", "hobbies"]).as_(["array", "undefined"])
            .is_("hobbies").as_("array")
            .end()
        )
        assert result is True

    def test_nested_mapping_checked_separately(self, person):
        result = (
            LegacyChecker(person["address"])
            .is_(["street", "city", "state"]).as_("string")
            .is_("zip").as_("number")
            .end()
        )
        assert result is True

    def test_single_type_message(self, person):
        stream = io.StringIO()
        checker = LegacyChecker(person, stream=stream).is_("age").as_("string")
        assert checker.end() is False
        assert checker.message == ["The key age must be string but got number"]
        assert stream.getvalue() == "The key age must be string but got number\n"

    def test_end_prints_to_stdout_by_default(self, person, capsys):
        assert not LegacyChecker(person).is_("age").as_("string").end()
        captured = capsys.readouterr()
        assert captured.out == "The key age must be string but got number\n"
        assert captured.err == ""

    def test_union_message(self, person):
        checker = LegacyChecker(person, stream=io.StringIO()).is_("name").as_(["array", "undefined"])
        assert not checker.end()
        assert checker.message == ["The key name must be one of array, undefined but got string"]

    def test_failure_is_sticky(self, person):
        checker = LegacyChecker(person, stream=io.StringIO())
        checker.is_("age").as_("string").is_("name").as_("string")
        assert checker.valid is False
        assert len(checker.message) == 1

    def test_every_key_reported(self, person):
        checker = LegacyChecker(person, stream=io.StringIO()).is_(["name", "post"]).as_("number")
        assert len(checker.message) == 2

    def test_valid_end_writes_nothing(self, person):
        stream = io.StringIO()
        assert LegacyChecker(person, stream=stream).is_("age").as_("number").end()
        assert stream.getvalue() == ""

    def test_as_before_is(self, person):
        with pytest.raises(InvalidInputError):
            LegacyChecker(person).as_("string")

    def test_does_not_mutate(self, person):
        before = repr(person)
        LegacyChecker(person, stream=io.StringIO()).is_("age").as_("string").end()
        assert repr(person) == before
