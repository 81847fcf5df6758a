"""Repository result kinds and exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a repository operation.

    Exactly one of ``value`` (on success) or ``error`` is meaningful. ``messages``
    holds the human-readable reasons for a failure, suitable for clients.
    """

    value: T | None = None
    error: ErrorKind | None = None
    messages: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, *messages: str) -> Result[T]:
        return cls(error=error, messages=tuple(messages))


CANCELLED_MESSAGE = "The query was interrupted due to query timeout or server error."


class StoreError(ValueError):
    """An internal store invariant was violated (a bug, not a client error)."""


class LoaderError(RuntimeError):
    """The initial customer set could not be loaded."""
