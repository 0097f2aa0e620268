"""First-generation checker, kept for callers of the old `is_/as_/end` API.

Prefer `ShapeValidator`: this checker binds to a single object, checks
eagerly on each `as_` call and has no strict mode. Failures are printed to
stdout by `end()`, as the first generation did, rather than to stderr.
"""

import sys
import warnings
from typing import Any, Mapping, Optional, Union

from shapeguard.errors import InvalidInputError
from shapeguard.registry import normalize_fields
from shapeguard.variants import UNDEFINED, TypeVariant, category_of, describe_variants, matches, normalize_variants


class LegacyChecker:
    """Eager field checker over one mapping.

    Example:
        LegacyChecker(obj).is_("name").as_("string").is_("age").as_("number").end()
    """

    def __init__(self, obj: Mapping[str, Any], stream: Optional[Any] = None):
        warnings.warn(
            "LegacyChecker is deprecated, use ShapeValidator",
            DeprecationWarning,
            stacklevel=2,
        )
        if not isinstance(obj, Mapping):
            raise InvalidInputError("You must pass an object")
        self.obj = obj
        self.stream = stream
        self.valid = True
        self.message: list[str] = []
        self._keys: Optional[list[str]] = None

    def is_(self, key: Union[str, list[str]]) -> "LegacyChecker":
        self._keys = normalize_fields(key)
        return self

    def as_(self, type_: Any) -> "LegacyChecker":
        """Check the keys selected by the last `is_` call right away."""
        if self._keys is None:
            raise InvalidInputError("Call is_() before as_()")
        variants = normalize_variants(type_)
        many = isinstance(type_, (list, tuple, set, frozenset))
        for key in self._keys:
            value = self.obj.get(key, UNDEFINED)
            if not matches(value, variants):
                self._failed(key, value, variants, many)
        return self

    def end(self) -> bool:
        """Return the verdict, printing every message to stdout (or `stream`) if it failed."""
        if not self.valid:
            stream = self.stream if self.stream is not None else sys.stdout
            for line in self.message:
                stream.write(line + "\n")
        return self.valid

    def _failed(self, key: str, value: Any, variants: tuple[TypeVariant, ...], many: bool) -> None:
        actual = category_of(value).value
        if many:
            expected = describe_variants(variants, sep=", ")
            self.message.append(f"The key {key} must be one of {expected} but got {actual}")
        else:
            expected = describe_variants(variants)
            self.message.append(f"The key {key} must be {expected} but got {actual}")
        self.valid = False
