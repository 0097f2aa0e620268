"""Base type predicates.

Plain functions usable on their own or as predicate variants, e.g.
`validator.is_satisfy("tags", is_nullable_strings)`. `UNDEFINED` counts as
the optional case.
"""

from typing import Any, Callable

from shapeguard.variants import UNDEFINED, TypeTag, category_of


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_optional_string(value: Any) -> bool:
    return value is UNDEFINED or is_string(value)


def is_nullable_string(value: Any) -> bool:
    return value is None or is_string(value)


def is_strings(value: Any) -> bool:
    return _is_list(value) and all(is_string(v) for v in value)


def is_nullable_strings(value: Any) -> bool:
    return _is_list(value) and all(is_nullable_string(v) for v in value)


def is_number(value: Any) -> bool:
    return category_of(value) is TypeTag.NUMBER


def is_optional_number(value: Any) -> bool:
    return value is UNDEFINED or is_number(value)


def is_nullable_number(value: Any) -> bool:
    return value is None or is_number(value)


def is_numbers(value: Any) -> bool:
    return _is_list(value) and all(is_number(v) for v in value)


def is_nullable_numbers(value: Any) -> bool:
    return _is_list(value) and all(is_nullable_number(v) for v in value)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_optional_boolean(value: Any) -> bool:
    return value is UNDEFINED or is_boolean(value)


def is_nullable_boolean(value: Any) -> bool:
    return value is None or is_boolean(value)


def is_booleans(value: Any) -> bool:
    return _is_list(value) and all(is_boolean(v) for v in value)


def is_nullable_booleans(value: Any) -> bool:
    return _is_list(value) and all(is_nullable_boolean(v) for v in value)


def is_object(value: Any) -> bool:
    """True for mappings and other plain objects; arrays and None are excluded."""
    return category_of(value) is TypeTag.OBJECT


def is_optional_object(value: Any) -> bool:
    return value is UNDEFINED or is_object(value)


def is_nullable_object(value: Any) -> bool:
    return value is None or is_object(value)


def is_objects(value: Any) -> bool:
    return _is_list(value) and all(is_object(v) for v in value)


def is_nullable_objects(value: Any) -> bool:
    return _is_list(value) and all(is_nullable_object(v) for v in value)


def is_somethings(value: Any, is_something: Callable[[Any], Any]) -> bool:
    """True if `value` is a list whose items all satisfy `is_something`."""
    return _is_list(value) and all(is_something(v) for v in value)


def is_nullable_somethings(value: Any, is_something: Callable[[Any], Any]) -> bool:
    return _is_list(value) and all(v is None or is_something(v) for v in value)
