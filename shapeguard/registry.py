"""Rule registry: field name to accepted type variants.

Each field is registered exactly once. A batch registration either writes
every field or none of them.
"""

from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Union

from shapeguard.errors import DuplicateFieldError, InvalidInputError
from shapeguard.logs import get_logger
from shapeguard.variants import TypeVariant, describe_variants, normalize_variants

logger = get_logger(__name__)


def normalize_fields(fields: Union[str, Iterable[str]]) -> list[str]:
    """Accept one field name or a list of them."""
    names = [fields] if isinstance(fields, str) else list(fields)
    if not names:
        raise InvalidInputError("At least one field name is required")
    for name in names:
        if not isinstance(name, str) or not name:
            raise InvalidInputError(f"Field names must be non-empty strings, got {name!r}")
    return names


class RuleRegistry:
    """Ordered mapping of field name to a non-empty tuple of type variants."""

    def __init__(self):
        self._rules: dict[str, tuple[TypeVariant, ...]] = {}

    def register(self, fields: Union[str, Iterable[str]], variants: Any) -> None:
        """Register `variants` for every name in `fields`.

        Raises:
            DuplicateFieldError: a name is already registered or repeated in the batch.
            InvalidInputError: empty field list, bad field name, or bad variants.
        """
        names = normalize_fields(fields)
        types = normalize_variants(variants)

        seen: set[str] = set()
        duplicates = []
        for name in names:
            if name in self._rules or name in seen:
                duplicates.append(name)
            seen.add(name)
        if duplicates:
            raise DuplicateFieldError(duplicates)

        for name in names:
            self._rules[name] = types

        logger.debug(
            "rule_registered",
            fields=names,
            variants=describe_variants(types),
        )

    def variants_for(self, field: str) -> tuple[TypeVariant, ...]:
        return self._rules[field]

    def view(self) -> Mapping[str, tuple[TypeVariant, ...]]:
        """Read-only view of the rules, in registration order."""
        return MappingProxyType(self._rules)

    def __contains__(self, field: object) -> bool:
        return field in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def items(self):
        return self._rules.items()
