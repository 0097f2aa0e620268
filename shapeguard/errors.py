"""Exceptions raised for malformed use of a validator.

Bad *data* is never raised: it is reported through the boolean verdict and
the diagnostic log. These exceptions signal a bug in the calling program.
"""

from typing import Iterable, Optional


class ShapeGuardError(Exception):
    """Base class for all shapeguard errors."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DuplicateFieldError(ShapeGuardError):
    """A field name was registered more than once on the same validator."""

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        names = ", ".join(f"`{f}`" for f in self.fields)
        super().__init__(
            f"Duplicate key {names}",
            field=self.fields[0] if self.fields else None,
        )


class InvalidInputError(ShapeGuardError):
    """Registration arguments or a legacy checker input are malformed."""
