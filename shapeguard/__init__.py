"""shapeguard: runtime shape validation for untyped mappings.

Usage:
    from shapeguard import ShapeValidator

    validator = ShapeValidator().is_string("name").is_number("age")
    if not validator.check(payload):
        # Inspect validator.messages
"""

from shapeguard.errors import DuplicateFieldError, InvalidInputError, ShapeGuardError
from shapeguard.legacy import LegacyChecker
from shapeguard.logs import configure_logging
from shapeguard.models import CheckReport, Diagnostic, ErrorCode, ValidatorOptions
from shapeguard.validator import ShapeValidator
from shapeguard.variants import UNDEFINED, TypeTag, category_of, matches

__all__ = [
    "ShapeValidator",
    "ValidatorOptions",
    "CheckReport",
    "Diagnostic",
    "ErrorCode",
    "TypeTag",
    "UNDEFINED",
    "category_of",
    "matches",
    "LegacyChecker",
    "ShapeGuardError",
    "DuplicateFieldError",
    "InvalidInputError",
    "configure_logging",
]
