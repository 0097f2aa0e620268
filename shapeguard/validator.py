"""Shape Validator: fluent rule registration and the check engine.

Usage:
    messages: list[str] = []
    is_student = (
        ShapeValidator[Student](message_sink=messages)
        .is_string("name")
        .is_number("age")
        .is_optional_array("hobbies")
    )
    if is_student.check(payload):
        # payload is narrowed to Student for static checkers
        ...

A check never raises for bad data. Failures come back as a False verdict
plus messages appended to `validator.messages`.
"""

import copy
import time
from typing import Any, Generic, Iterable, Mapping, Optional, TypeGuard, TypeVar, Union

from shapeguard.errors import InvalidInputError
from shapeguard.logs import get_logger
from shapeguard.models import CheckReport, Diagnostic, ErrorCode, MessageSink, ValidatorOptions
from shapeguard.registry import RuleRegistry
from shapeguard.variants import (
    UNDEFINED,
    Predicate,
    TypeTag,
    TypeVariant,
    category_of,
    describe_variants,
    matches,
)

logger = get_logger(__name__)

T = TypeVar("T")
Fields = Union[str, Iterable[str]]


def _array_of(predicate: Predicate) -> Predicate:
    """Predicate accepting a list or tuple whose items all satisfy `predicate`."""
    if not callable(predicate):
        raise InvalidInputError(f"Item predicate must be callable, got {type(predicate).__name__}")

    def check(value: Any) -> bool:
        return isinstance(value, (list, tuple)) and all(predicate(v) for v in value)

    check.__name__ = f"array_of_{getattr(predicate, '__name__', 'predicate')}"
    return check


def _array_of_tag(tag: TypeTag) -> Predicate:
    check = _array_of(lambda v: matches(v, (tag,)))
    check.__name__ = f"{tag.value}_array"
    return check


class ShapeValidator(Generic[T]):
    """Checks that a mapping carries the registered fields with accepted types.

    Rules are fixed by the fluent `is_*` calls, then `check` may be called
    any number of times. Messages accumulate across calls.
    """

    def __init__(
        self,
        options: Optional[ValidatorOptions] = None,
        *,
        strict: Optional[bool] = None,
        silent: Optional[bool] = None,
        message_sink: Optional[MessageSink] = None,
        stream: Optional[Any] = None,
    ):
        overrides = {
            name: value
            for name, value in (
                ("strict", strict),
                ("silent", silent),
                ("message_sink", message_sink),
                ("stream", stream),
            )
            if value is not None
        }
        if options is not None and overrides:
            raise InvalidInputError(
                f"Pass either options or keyword settings, not both: {', '.join(overrides)}"
            )
        self.options = options if options is not None else ValidatorOptions(**overrides)
        self._registry = RuleRegistry()
        self.messages: list[str] = []

    @property
    def strict(self) -> bool:
        return self.options.strict

    @property
    def silent(self) -> bool:
        return self.options.silent

    @property
    def rules(self) -> Mapping[str, tuple[TypeVariant, ...]]:
        return self._registry.view()

    # ── Registration ──

    def is_(self, fields: Fields, variants: Any) -> "ShapeValidator[T]":
        """Register fields against one type variant or a list of them."""
        self._registry.register(fields, variants)
        return self

    def is_string(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.STRING])

    def is_optional_string(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.STRING, TypeTag.UNDEFINED])

    def is_nullable_string(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.STRING, TypeTag.NULL])

    def is_string_array(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [_array_of_tag(TypeTag.STRING)])

    def is_number(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.NUMBER])

    def is_optional_number(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.NUMBER, TypeTag.UNDEFINED])

    def is_nullable_number(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.NUMBER, TypeTag.NULL])

    def is_number_array(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [_array_of_tag(TypeTag.NUMBER)])

    def is_boolean(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.BOOLEAN])

    def is_optional_boolean(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.BOOLEAN, TypeTag.UNDEFINED])

    def is_nullable_boolean(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.BOOLEAN, TypeTag.NULL])

    def is_boolean_array(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [_array_of_tag(TypeTag.BOOLEAN)])

    def is_object(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.OBJECT])

    def is_optional_object(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.OBJECT, TypeTag.UNDEFINED])

    def is_nullable_object(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.OBJECT, TypeTag.NULL])

    def is_optional_null(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.NULL, TypeTag.UNDEFINED])

    def is_any_array(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.ARRAY])

    def is_array(self, fields: Fields) -> "ShapeValidator[T]":
        """Deprecated alias of `is_any_array`."""
        return self.is_any_array(fields)

    def is_optional_array(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.ARRAY, TypeTag.UNDEFINED])

    def is_nullable_array(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.ARRAY, TypeTag.NULL])

    def is_undefined(self, fields: Fields) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.UNDEFINED])

    def is_satisfy(self, fields: Fields, predicate: Predicate) -> "ShapeValidator[T]":
        """Register a custom predicate. Its truthiness decides the match."""
        return self.is_(fields, [predicate])

    def is_optional_satisfy(self, fields: Fields, predicate: Predicate) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.UNDEFINED, predicate])

    def is_nullable_satisfy(self, fields: Fields, predicate: Predicate) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.NULL, predicate])

    def is_satisfy_array(self, fields: Fields, predicate: Predicate) -> "ShapeValidator[T]":
        """Register a list whose every item satisfies `predicate`."""
        return self.is_(fields, [_array_of(predicate)])

    def is_satisfy_optional_array(self, fields: Fields, predicate: Predicate) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.UNDEFINED, _array_of(predicate)])

    def is_satisfy_nullable_array(self, fields: Fields, predicate: Predicate) -> "ShapeValidator[T]":
        return self.is_(fields, [TypeTag.NULL, _array_of(predicate)])

    # ── Checking ──

    def check(self, candidate: object) -> TypeGuard[T]:
        """Return True if `candidate` conforms to the registered rules."""
        return self.validate(candidate).passed

    def validate(self, candidate: object) -> CheckReport:
        """Check `candidate` and return the full report.

        Args:
            candidate: Value of unknown type, usually parsed JSON.

        Returns:
            CheckReport with the verdict, per-field results and every finding.
        """
        start_time = time.perf_counter()

        if not isinstance(candidate, Mapping):
            diag = Diagnostic(
                code=ErrorCode.NOT_AN_OBJECT,
                message="Input is not an object",
                actual=category_of(candidate).value,
            )
            self._emit(diag)
            report = CheckReport.build([diag])
            self._log_complete(report, start_time)
            return report

        snapshot = self._snapshot(candidate)
        diagnostics: list[Diagnostic] = []
        field_results: dict[str, bool] = {}
        consumed: set[str] = set()

        for field, variants in self._registry.items():
            value = snapshot[field] if field in snapshot else UNDEFINED
            valid = matches(value, variants)
            if not valid:
                diag = self._mismatch(field, value, variants)
                diagnostics.append(diag)
                self._emit(diag)
            field_results[field] = valid
            consumed.add(field)

        unexpected: list[str] = []
        if self.strict:
            # Keys holding UNDEFINED count as absent
            unexpected = [
                str(key)
                for key, value in snapshot.items()
                if key not in consumed and value is not UNDEFINED
            ]
            if unexpected:
                diag = self._unexpected(unexpected)
                diagnostics.append(diag)
                self._emit(diag)

        report = CheckReport.build(diagnostics, field_results, unexpected)
        self._log_complete(report, start_time)
        return report

    # ── Helper Methods ──

    def _snapshot(self, candidate: Mapping) -> dict:
        """Private copy of the candidate so predicates cannot touch caller data.

        Each value is deep-copied on its own. Only a value that cannot be
        copied (a lock, a socket) is kept by reference.
        """
        snapshot = {}
        for key, value in candidate.items():
            try:
                snapshot[key] = copy.deepcopy(value)
            except Exception as e:
                logger.warning("snapshot_fallback", key=str(key), error=str(e))
                snapshot[key] = value
        return snapshot

    def _mismatch(self, field: str, value: Any, variants: tuple[TypeVariant, ...]) -> Diagnostic:
        actual = category_of(value).value
        expected = describe_variants(variants)
        if len(variants) == 1:
            message = f"Key `{field}` must be {expected} but got {actual}"
        else:
            message = f"Key `{field}` must be one of {expected} but got {actual}"
        return Diagnostic(
            code=ErrorCode.FIELD_TYPE_MISMATCH,
            message=message,
            field=field,
            actual=actual,
            expected=expected,
        )

    def _unexpected(self, keys: list[str]) -> Diagnostic:
        names = ", ".join(f"`{k}`" for k in keys)
        if len(keys) == 1:
            message = f"Key {names} is not allowed"
        else:
            message = f"Keys {names} are not allowed"
        return Diagnostic(code=ErrorCode.UNEXPECTED_KEYS, message=message)

    def _emit(self, diag: Diagnostic) -> None:
        """Record a message, forward it to the sink and, unless silent, the error stream."""
        self.messages.append(diag.message)
        self.options.deliver(diag.message)
        if not self.silent:
            stream = self.options.error_stream()
            stream.write(f"[ShapeValidator] check failed: {diag.message}\n")

    def _log_complete(self, report: CheckReport, start_time: float) -> None:
        duration = (time.perf_counter() - start_time) * 1000
        logger.debug(
            "check_complete",
            passed=report.passed,
            fields=len(self._registry),
            failures=len(report.diagnostics),
            unexpected_keys=report.unexpected_keys,
            duration_ms=round(duration, 2),
        )
