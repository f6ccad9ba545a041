"""Tri-state outcome returned by every probe."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar


T = TypeVar("T")
U = TypeVar("U")


class OutcomeStatus(str, Enum):
    DETECTED = "detected"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


class ErrorKind(str, Enum):
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    DETECTION_FAILED = "detection_failed"
    IO_FAILURE = "io_failure"
    PARSE_FAILURE = "parse_failure"


class ProbeFailure(Exception):
    """Base class for faults raised inside a probe strategy."""

    kind: ErrorKind = ErrorKind.DETECTION_FAILED


class UnsupportedPlatformError(ProbeFailure):
    kind = ErrorKind.UNSUPPORTED_PLATFORM


class DetectionFailedError(ProbeFailure):
    kind = ErrorKind.DETECTION_FAILED


class ParseFailureError(ProbeFailure, ValueError):
    kind = ErrorKind.PARSE_FAILURE


@dataclass(frozen=True)
class ProbeError:
    """Diagnostic carried by the error arm of a :class:`ProbeOutcome`."""

    kind: ErrorKind
    message: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ProbeError":
        if isinstance(exc, ProbeFailure):
            return cls(exc.kind, str(exc))
        if isinstance(exc, OSError):
            return cls(ErrorKind.IO_FAILURE, str(exc))
        return cls(ErrorKind.DETECTION_FAILED, str(exc) or type(exc).__name__)

    def __str__(self) -> str:
        if self.kind is ErrorKind.UNSUPPORTED_PLATFORM:
            return "Platform not supported"
        if self.kind is ErrorKind.IO_FAILURE:
            return f"I/O error: {self.message}"
        if self.kind is ErrorKind.PARSE_FAILURE:
            return f"Parse error: {self.message}"
        return f"Detection failed: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message}


@dataclass(frozen=True)
class ProbeOutcome(Generic[T]):
    """Detected value, unavailable marker, or error.

    Exactly one arm is populated: ``value`` for :attr:`OutcomeStatus.DETECTED`,
    ``error`` for :attr:`OutcomeStatus.ERROR`, neither for
    :attr:`OutcomeStatus.UNAVAILABLE`. Unavailable is not a failure and never
    carries diagnostic text. Use the :meth:`detected`, :meth:`unavailable` and
    :meth:`failed` constructors rather than building instances directly.
    """

    status: OutcomeStatus
    value: T | None = None
    error: ProbeError | None = None

    def __post_init__(self) -> None:
        if self.status is OutcomeStatus.DETECTED:
            if self.value is None or self.error is not None:
                raise ValueError("Detected outcomes carry a value and no error")
        elif self.status is OutcomeStatus.ERROR:
            if self.error is None or self.value is not None:
                raise ValueError("Error outcomes carry an error and no value")
        elif self.value is not None or self.error is not None:
            raise ValueError("Unavailable outcomes carry neither value nor error")

    @classmethod
    def detected(cls, value: T) -> "ProbeOutcome[T]":
        return cls(OutcomeStatus.DETECTED, value=value)

    @classmethod
    def unavailable(cls) -> "ProbeOutcome[T]":
        return cls(OutcomeStatus.UNAVAILABLE)

    @classmethod
    def failed(cls, kind: ErrorKind, message: str = "") -> "ProbeOutcome[T]":
        return cls(OutcomeStatus.ERROR, error=ProbeError(kind, message))

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ProbeOutcome[T]":
        return cls(OutcomeStatus.ERROR, error=ProbeError.from_exception(exc))

    @property
    def is_detected(self) -> bool:
        return self.status is OutcomeStatus.DETECTED

    @property
    def is_unavailable(self) -> bool:
        return self.status is OutcomeStatus.UNAVAILABLE

    @property
    def is_error(self) -> bool:
        return self.status is OutcomeStatus.ERROR

    def map(self, func: Callable[[T], U]) -> "ProbeOutcome[U]":
        """Transform a detected value, passing the other arms through.

        A function that returns ``None`` turns the outcome into
        :meth:`unavailable`, since a detected outcome always carries a value.
        """

        if self.status is OutcomeStatus.DETECTED:
            mapped = func(self.value)  # type: ignore[arg-type]
            if mapped is None:
                return ProbeOutcome.unavailable()
            return ProbeOutcome.detected(mapped)
        return ProbeOutcome(self.status, error=self.error)

    def and_then(self, func: Callable[[T], "ProbeOutcome[U]"]) -> "ProbeOutcome[U]":
        if self.status is OutcomeStatus.DETECTED:
            return func(self.value)  # type: ignore[arg-type]
        return ProbeOutcome(self.status, error=self.error)

    def value_or(self, default: T) -> T:
        if self.status is OutcomeStatus.DETECTED:
            return self.value  # type: ignore[return-value]
        return default

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"status": self.status.value}
        if self.value is not None:
            to_dict = getattr(self.value, "to_dict", None)
            payload["value"] = to_dict() if callable(to_dict) else self.value
        if self.error is not None:
            payload["error"] = self.error.to_dict()
        return payload
