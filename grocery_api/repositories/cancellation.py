from __future__ import annotations

from threading import Event
from time import monotonic


class CancellationToken:
    """Cooperative cancel signal with an optional deadline.

    Repository operations only look at the token on entry; work that has
    already started always runs to completion.
    """

    def __init__(self, timeout_s: float | None = None) -> None:
        self._event = Event()
        self._deadline = monotonic() + timeout_s if timeout_s is not None else None

    @classmethod
    def from_timeout_ms(cls, timeout_ms: int) -> CancellationToken:
        return cls(timeout_s=timeout_ms / 1000.0)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and monotonic() >= self._deadline
