"""Unified error model for easify."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass
class ErrorLocation:
    source: Optional[str] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.source and self.column is not None:
            return f"{self.source}:{self.column}"
        if self.column is not None:
            return f"column {self.column}"
        if self.source:
            return self.source
        return "unknown location"


class EasifyError(Exception):
    """Base class for all pattern and unpacking errors surfaced to callers."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(source=source, column=column)
        self.source = source
        self.column = column
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class MalformedPattern(EasifyError):
    """Raised when a slot list cannot be compiled into a pattern."""

    code = "E_PATTERN_MALFORMED"

    def __init__(
        self,
        message: str,
        *,
        rest_positions: Sequence[int] = (),
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.rest_positions: Tuple[int, ...] = tuple(rest_positions)


class UnpackError(EasifyError):
    """Base class for failures of a single unpacking attempt."""


class ArityMismatch(UnpackError):
    """Raised when a rest-free pattern meets a sequence of the wrong length."""

    code = "E_ARITY_MISMATCH"

    def __init__(self, expected: int, actual: int, **kwargs) -> None:
        kwargs.setdefault(
            "hint",
            "Add a '*rest' slot to absorb a variable number of elements",
        )
        super().__init__(
            f"Expected exactly {expected} element(s) to unpack, got {actual}",
            **kwargs,
        )
        self.expected = expected
        self.actual = actual


class InsufficientElements(UnpackError):
    """Raised when a sequence is shorter than a pattern's minimum length."""

    code = "E_INSUFFICIENT_ELEMENTS"

    def __init__(self, minimum: int, actual: int, **kwargs) -> None:
        super().__init__(
            f"Expected at least {minimum} element(s) to unpack, got {actual}",
            **kwargs,
        )
        self.minimum = minimum
        self.actual = actual


class SlotSyntaxError(EasifyError):
    """Raised when a textual slot declaration cannot be parsed."""

    code = "E_SLOT_SYNTAX"


class ImmutableBindingError(EasifyError, TypeError):
    """Raised when rebinding a slot that was not declared ``mut``."""

    code = "E_IMMUTABLE_BINDING"


__all__ = [
    "EasifyError",
    "MalformedPattern",
    "UnpackError",
    "ArityMismatch",
    "InsufficientElements",
    "SlotSyntaxError",
    "ImmutableBindingError",
    "ErrorLocation",
]
