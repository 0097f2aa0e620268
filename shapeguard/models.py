"""Validation models: diagnostic codes, findings, validator options and the check report.

All checking is deterministic: same rules and same candidate give the same report.
"""

import sys
from enum import Enum
from typing import Any, Callable, MutableSequence, Optional, TextIO, Union

from pydantic import BaseModel, Field, field_validator


class ErrorCode(str, Enum):
    """Codes for every kind of finding a check can produce."""

    NOT_AN_OBJECT = "NOT_AN_OBJECT"
    FIELD_TYPE_MISMATCH = "FIELD_TYPE_MISMATCH"
    UNEXPECTED_KEYS = "UNEXPECTED_KEYS"


class Diagnostic(BaseModel):
    """A single validation finding."""

    code: ErrorCode
    message: str
    field: Optional[str] = None     # Which key triggered this
    actual: Optional[str] = None    # Runtime category that was found
    expected: Optional[str] = None  # Description of the accepted variants

    model_config = {"use_enum_values": True, "frozen": True}


MessageSink = Union[Callable[[str], Any], MutableSequence[str]]


class ValidatorOptions(BaseModel):
    """Per-validator configuration.

    Attributes:
        strict: Reject candidates carrying keys no rule covers.
        silent: Do not write diagnostics to the error stream.
        message_sink: Callable or appendable list receiving every message.
        stream: Error stream for non-silent output. Defaults to stderr at write time.
    """

    strict: bool = True
    silent: bool = False
    message_sink: Optional[Any] = None
    stream: Optional[Any] = None

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @field_validator("message_sink")
    @classmethod
    def _check_sink(cls, value: Any) -> Any:
        if value is None or callable(value) or hasattr(value, "append"):
            return value
        raise ValueError("message_sink must be callable or support append()")

    @field_validator("stream")
    @classmethod
    def _check_stream(cls, value: Any) -> Any:
        if value is None or hasattr(value, "write"):
            return value
        raise ValueError("stream must be a writable text stream")

    def deliver(self, message: str) -> None:
        """Forward a message to the configured sink, if any."""
        if self.message_sink is None:
            return
        if callable(self.message_sink):
            self.message_sink(message)
        else:
            self.message_sink.append(message)

    def error_stream(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stderr


class CheckReport(BaseModel):
    """Complete outcome of one `validate` call."""

    passed: bool = Field(description="True if every field matched and no unexpected key remains")
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    field_results: dict[str, bool] = Field(
        default_factory=dict,
        description="Per-field match result, in registration order",
    )
    unexpected_keys: list[str] = Field(default_factory=list)
    summary: dict[str, int] = Field(
        default_factory=lambda: {code.value: 0 for code in ErrorCode},
        description="Count of findings by code",
    )

    @property
    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    @classmethod
    def build(
        cls,
        diagnostics: list[Diagnostic],
        field_results: Optional[dict[str, bool]] = None,
        unexpected_keys: Optional[list[str]] = None,
    ) -> "CheckReport":
        """Build a report from the findings of one check."""
        field_results = field_results or {}
        unexpected_keys = unexpected_keys or []

        summary = {code.value: 0 for code in ErrorCode}
        for diag in diagnostics:
            summary[diag.code] += 1

        # A non-object candidate has no field results but still fails
        passed = (
            summary[ErrorCode.NOT_AN_OBJECT.value] == 0
            and all(field_results.values())
            and not unexpected_keys
        )

        return cls(
            passed=passed,
            diagnostics=diagnostics,
            field_results=field_results,
            unexpected_keys=unexpected_keys,
            summary=summary,
        )
