"""Explicit probe outcomes.

A probe either produced a value or failed with a reason. Failures are data,
so callers decide which fallback to use instead of catching exceptions.
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful probe outcome."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    """Probe outcome carrying the reason it could not produce a value."""

    reason: str

    @property
    def ok(self) -> bool:
        return False


ProbeResult: TypeAlias = Ok[T] | Failed


def value_or(result: "ProbeResult[T]", default: T) -> T:
    """Unwrap a probe result, substituting ``default`` for a failure."""
    if isinstance(result, Ok):
        return result.value
    return default
