"""Type variants and the matcher.

A type variant is one accepted shape for a field value: either a `TypeTag`
naming a runtime category or a predicate supplied by the caller. A field
passes when any of its variants matches.
"""

import numbers
from enum import Enum
from typing import Any, Callable, Iterable, Sequence, Union

from shapeguard.errors import InvalidInputError
from shapeguard.logs import get_logger

logger = get_logger(__name__)


class _Undefined:
    """Marker for a key that is absent from the candidate."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNDEFINED = _Undefined()


class TypeTag(str, Enum):
    """Runtime categories a value can be checked against."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"
    UNDEFINED = "undefined"
    FUNCTION = "function"


Predicate = Callable[[Any], Any]
TypeVariant = Union[TypeTag, Predicate]


def category_of(value: Any) -> TypeTag:
    """Return the runtime category of a value.

    `bool` is checked before numbers since it subclasses `int`. Mappings and
    any instance without a more specific category are `object`.
    """
    if value is UNDEFINED:
        return TypeTag.UNDEFINED
    if value is None:
        return TypeTag.NULL
    if isinstance(value, bool):
        return TypeTag.BOOLEAN
    if isinstance(value, numbers.Number):
        return TypeTag.NUMBER
    if isinstance(value, str):
        return TypeTag.STRING
    if isinstance(value, (list, tuple)):
        return TypeTag.ARRAY
    if callable(value):
        return TypeTag.FUNCTION
    return TypeTag.OBJECT


def normalize_variant(variant: Any) -> TypeVariant:
    """Turn a tag name, `TypeTag` or callable into a `TypeVariant`."""
    if isinstance(variant, TypeTag):
        return variant
    if isinstance(variant, str):
        try:
            return TypeTag(variant)
        except ValueError:
            valid = ", ".join(t.value for t in TypeTag)
            raise InvalidInputError(
                f"Unknown type '{variant}', expected one of: {valid}"
            ) from None
    if callable(variant):
        return variant
    raise InvalidInputError(
        f"Type variant must be a type name or a predicate, got {type(variant).__name__}"
    )


def normalize_variants(variants: Union[Any, Iterable[Any]]) -> tuple[TypeVariant, ...]:
    """Normalize one variant or a list of them. The result is never empty."""
    if isinstance(variants, (list, tuple, set, frozenset)):
        items = tuple(normalize_variant(v) for v in variants)
    else:
        items = (normalize_variant(variants),)
    if not items:
        raise InvalidInputError("At least one type variant is required")
    return items


def matches(value: Any, variants: Sequence[TypeVariant]) -> bool:
    """Return True if `value` satisfies any of `variants`.

    Variants are tried in order and the first match wins. A predicate's
    truthiness is taken as is. A predicate that raises counts as not
    matching, logged as `predicate_failed`.
    """
    for variant in variants:
        if isinstance(variant, TypeTag):
            if variant is TypeTag.UNDEFINED:
                ok = value is UNDEFINED
            elif variant is TypeTag.NULL:
                ok = value is None
            elif variant is TypeTag.ARRAY:
                ok = isinstance(value, (list, tuple))
            else:
                ok = category_of(value) is variant
        else:
            try:
                ok = bool(variant(value))
            except Exception as e:
                logger.warning(
                    "predicate_failed",
                    predicate=describe_variant(variant),
                    value_type=category_of(value).value,
                    error=str(e),
                )
                ok = False
        if ok:
            return True
    return False


def describe_variant(variant: TypeVariant) -> str:
    if isinstance(variant, TypeTag):
        return variant.value
    name = getattr(variant, "__name__", None)
    if not name or name == "<lambda>":
        return "custom predicate"
    return f"satisfy({name})"


def describe_variants(variants: Sequence[TypeVariant], sep: str = " | ") -> str:
    """Human-readable description of a variant set, e.g. `array | undefined`."""
    return sep.join(describe_variant(v) for v in variants)
